from types import SimpleNamespace

from core import Tag
from core.desktop.devtools.application.edit_session import EditDraft
from core.desktop.devtools.interface import tui_actions
from core.desktop.devtools.interface.tui_comments import CommentComposer
from core.desktop.devtools.interface.tui_editing import EditSession
from core.desktop.devtools.interface.tui_events import CommentCreated, TagToggled, TaskDeleted, TaskSaved
from core.desktop.devtools.interface.tui_modes import (
    AssigningTagsMode,
    ConfirmDeleteMode,
    DetailMode,
    NormalMode,
)


class Ctl(SimpleNamespace):
    """Controller double that runs deferred work immediately and records the events."""

    def __init__(self, store, mode=None, tags=()):
        super().__init__(
            store=store,
            mode=mode or NormalMode(),
            project=SimpleNamespace(id=1),
            working_set=SimpleNamespace(tags=list(tags)),
            comments=CommentComposer(),
            deferred=[],
            events=[],
        )

    def defer(self, operation, work):
        self.deferred.append(operation)
        self.events.append(work())


def test_confirm_delete_captures_target_and_ignores_other_keys():
    deleted = []
    ctl = Ctl(SimpleNamespace(delete_task=deleted.append), mode=DetailMode(4))
    tui_actions.open_delete_confirm(ctl, SimpleNamespace(id=4, title="Old"), return_to=ctl.mode)
    mode = ctl.mode
    assert mode == ConfirmDeleteMode(4, "Old", return_to=DetailMode(4))
    for key in ("q", "e", "enter", "x"):
        tui_actions.handle_confirm_delete_key(ctl, mode, key)
        assert ctl.mode is mode
    tui_actions.handle_confirm_delete_key(ctl, mode, "N")
    assert ctl.mode == DetailMode(4)
    tui_actions.handle_confirm_delete_key(ctl, mode, "y")
    assert ctl.mode == NormalMode()
    assert deleted == [4] and ctl.events == [TaskDeleted(4)]


def test_toggle_assigned_tag_reads_persisted_tags():
    calls = []
    attached = {7}
    store = SimpleNamespace(
        get_task_tags=lambda task_id: [Tag(id=t, name=str(t)) for t in sorted(attached)],
        add_tag_to_task=lambda task_id, tag_id: calls.append(("add", tag_id)),
        remove_tag_from_task=lambda task_id, tag_id: calls.append(("remove", tag_id)),
    )
    ctl = Ctl(store, tags=[Tag(id=7, name="x"), Tag(id=8, name="y")])
    tui_actions.toggle_assigned_tag(ctl, AssigningTagsMode(task_id=2, cursor=0))
    tui_actions.toggle_assigned_tag(ctl, AssigningTagsMode(task_id=2, cursor=9))
    assert calls == [("remove", 7), ("add", 8)]
    assert ctl.events == [TagToggled(2, 7, attached=False), TagToggled(2, 8, attached=True)]


def test_toggle_assigned_tag_without_tags_is_noop():
    ctl = Ctl(SimpleNamespace())
    tui_actions.toggle_assigned_tag(ctl, AssigningTagsMode(task_id=2))
    assert ctl.deferred == []


def test_save_session_blank_title_discards():
    ctl = Ctl(SimpleNamespace(), mode=None)
    session = EditSession(EditDraft(title="   "))
    tui_actions.save_session(ctl, session)
    assert ctl.mode == NormalMode() and ctl.deferred == []


def test_save_session_creates_task():
    created = []

    def save_task_with_tags(project_id, task_id, title, description, notes, priority, remove_tag_ids=(), add_tag_ids=()):
        assert task_id is None
        created.append((project_id, title, priority))
        return 11

    ctl = Ctl(SimpleNamespace(save_task_with_tags=save_task_with_tags))
    session = EditSession(EditDraft(title=" New ", priority_text="12"))
    tui_actions.save_session(ctl, session)
    assert created == [(1, "New", 10)]
    assert ctl.events == [TaskSaved(11, created=True)]


def test_submit_comment_sends_trimmed_text_only():
    posted = []

    def create_comment(task_id, content):
        posted.append(content)
        return SimpleNamespace(id=1, task_id=task_id, content=content)

    ctl = Ctl(SimpleNamespace(create_comment=create_comment))
    mode = DetailMode(5, comment_focused=True)
    tui_actions.submit_comment(ctl, mode)
    assert ctl.deferred == []
    ctl.comments.buffer.insert_text("  looks good \n")
    tui_actions.submit_comment(ctl, mode)
    assert posted == ["looks good"]
    assert isinstance(ctl.events[0], CommentCreated) and ctl.events[0].task_id == 5
    # Clearing happens only once the store confirms.
    assert ctl.comments.text == "  looks good \n"
