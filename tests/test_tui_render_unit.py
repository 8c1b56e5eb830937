import pytest
from prompt_toolkit.formatted_text.utils import fragment_list_to_text

from core.desktop.devtools.interface.tui_controller import TaskListController
from core.desktop.devtools.interface.tui_display import display_width
from core.desktop.devtools.interface.tui_events import KeyPress
from core.desktop.devtools.interface.tui_projects import ProjectListController
from core.desktop.devtools.interface.tui_render import render_project_screen, render_task_screen
from infrastructure.sqlite_repository import SqliteTaskStore


@pytest.fixture
def store():
    s = SqliteTaskStore(":memory:")
    yield s
    s.close()


def _lines(formatted):
    return fragment_list_to_text(formatted).split("\n")


def _assert_fits(formatted, width, height):
    lines = _lines(formatted)
    assert len(lines) <= height
    assert all(display_width(line) <= width for line in lines)


def _tasks_ctl(store, height=24):
    project = store.create_project("Home")
    ctl = TaskListController(store, project, height=height)
    return ctl


def test_task_rows_show_priority_title_and_tags(store):
    ctl = _tasks_ctl(store)
    task = store.create_task(ctl.project.id, "Write report", description="first line\nsecond", priority=8)
    store.add_tag_to_task(task.id, store.get_tag_by_name("todo").id)
    ctl.start()
    text = fragment_list_to_text(render_task_screen(ctl, 80, 24))
    assert "Home" in text and "Write report" in text
    assert "[todo]" in text and "first line" in text and "second" not in text
    assert "> P8" in text


def test_loading_and_empty_states(store):
    ctl = _tasks_ctl(store)
    assert "Loading" in fragment_list_to_text(render_task_screen(ctl, 80, 24))
    ctl.start()
    assert "No tasks" in fragment_list_to_text(render_task_screen(ctl, 80, 24))


def test_selected_row_style_precedes_fragment_style(store):
    ctl = _tasks_ctl(store)
    store.create_task(ctl.project.id, "Only", priority=9)
    ctl.start()
    styles = [style for style, text in render_task_screen(ctl, 80, 24) if text == "Only"]
    assert styles == ["class:selected class:text"]


@pytest.mark.parametrize("width,height", [(20, 8), (40, 14), (120, 50)])
def test_every_mode_fits_the_screen(store, width, height):
    ctl = _tasks_ctl(store, height=height)
    for i in range(6):
        t = store.create_task(ctl.project.id, f"Task number {i} with a long title " * 2, description="d " * 80)
        store.create_comment(t.id, "c " * 100)
    ctl.start()
    sequences = [
        [],
        ["f"],
        ["escape", "t"],
        ["escape", "d"],
        ["n", "n"],
        ["escape", "?"],
        ["x", "enter"],
        ["c", "ж", "enter", "x"],
    ]
    for keys in sequences:
        for key in keys:
            ctl.dispatch(KeyPress(key))
        _assert_fits(render_task_screen(ctl, width, height), width, height)
    ctl.dispatch(KeyPress("escape"))


def test_detail_lists_comments_and_composer(store):
    ctl = _tasks_ctl(store, height=30)
    task = store.create_task(ctl.project.id, "T", notes="remember")
    store.create_comment(task.id, "first note")
    ctl.start()
    ctl.dispatch(KeyPress("enter"))
    text = fragment_list_to_text(render_task_screen(ctl, 80, 30))
    assert "first note" in text and "remember" in text and "Comments (1)" in text


def test_project_screen_states(store):
    ctl = ProjectListController(store)
    assert "Loading" in fragment_list_to_text(render_project_screen(ctl, 60, 20))
    ctl.start(reopen_last=False)
    assert "No projects" in fragment_list_to_text(render_project_screen(ctl, 60, 20))
    store.create_project("Alpha", "first project")
    ctl.request_projects()
    text = fragment_list_to_text(render_project_screen(ctl, 60, 20))
    assert "> Alpha" in text and "first project" in text
    ctl.dispatch(KeyPress("n"))
    _assert_fits(render_project_screen(ctl, 30, 10), 30, 10)
    ctl.dispatch(KeyPress("escape"))
    ctl.dispatch(KeyPress("d"))
    assert "Alpha" in fragment_list_to_text(render_project_screen(ctl, 60, 20))
