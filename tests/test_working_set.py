from types import SimpleNamespace

from core import Tag, Task
from core.desktop.devtools.application.working_set import FilterParams, WorkingSet, fetch_tasks


def _task(task_id, title="t"):
    return Task(id=task_id, project_id=1, title=title)


def _tags():
    return [Tag(id=1, name="active", group_id=1), Tag(id=4, name="complete", group_id=1), Tag(id=7, name="home")]


def test_filter_params_exclude_complete_unless_showing_completed():
    ws = WorkingSet(1)
    ws.apply_tags(_tags())
    ws.set_search("  milk ")
    params = ws.filter_params()
    assert params.search == "milk"
    assert params.exclude_tag_id == 4
    ws.toggle_show_completed()
    assert ws.filter_params().exclude_tag_id is None
    assert ws.filter_params().tag_id == 4


def test_toggle_completed_restores_previous_filter():
    ws = WorkingSet(1)
    ws.apply_tags(_tags())
    ws.set_tag_filter(7)
    ws.cursor = 3
    ws.toggle_show_completed()
    assert ws.showing_completed and ws.selected_tag_id == 4 and ws.cursor == 0
    ws.toggle_show_completed()
    assert not ws.showing_completed and ws.selected_tag_id == 7


def test_toggle_completed_restores_no_filter():
    ws = WorkingSet(1)
    ws.apply_tags(_tags())
    ws.toggle_show_completed()
    ws.toggle_show_completed()
    assert ws.selected_tag_id is None


def test_apply_loaded_clamps_cursor():
    ws = WorkingSet(1)
    ws.apply_loaded([_task(i) for i in range(5)])
    ws.cursor = 4
    ws.apply_loaded([_task(1), _task(2)])
    assert ws.cursor == 1
    ws.apply_loaded([])
    assert ws.cursor == 0 and ws.current_task() is None


def test_apply_loaded_selects_pending_task():
    ws = WorkingSet(1)
    ws.pending_select_id = 30
    ws.apply_loaded([_task(10), _task(20), _task(30)])
    assert ws.cursor == 2 and ws.pending_select_id is None


def test_generations_mark_older_reloads_stale():
    ws = WorkingSet(1)
    first, _ = ws.begin_reload()
    second, _ = ws.begin_reload()
    assert not ws.is_current(first)
    assert ws.is_current(second)


def test_apply_tags_drops_filter_for_deleted_tag():
    ws = WorkingSet(1)
    ws.set_tag_filter(99)
    ws.apply_tags(_tags())
    assert ws.selected_tag_id is None
    assert ws.complete_tag_id == 4


def test_fetch_tasks_resolves_complete_tag_and_builds_query():
    calls = {}

    def list_tasks_filtered(project_id, search, tag_id, exclude):
        calls["args"] = (project_id, search, tag_id, exclude)
        return [_task(1)]

    store = SimpleNamespace(
        get_tag_by_name=lambda name: Tag(id=9, name=name),
        list_tasks_filtered=list_tasks_filtered,
    )
    complete_id, tasks = fetch_tasks(store, FilterParams(project_id=3, search="x"))
    assert complete_id == 9 and len(tasks) == 1
    assert calls["args"] == (3, "x", None, 9)

    fetch_tasks(store, FilterParams(project_id=3, showing_completed=True, complete_tag_id=9))
    assert calls["args"] == (3, "", 9, None)
