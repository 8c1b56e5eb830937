"""Action handlers that write to the store, extracted from the task controller."""

from core import Task
from core.desktop.devtools.application.edit_session import save_draft
from core.desktop.devtools.interface.tui_events import CommentCreated, TagToggled, TaskDeleted, TaskSaved
from core.desktop.devtools.interface.tui_modes import (
    AssigningTagsMode,
    ConfirmDeleteMode,
    DetailMode,
    Mode,
    NormalMode,
)


def open_delete_confirm(ctl, task: Task, return_to: Mode) -> None:
    # Target is captured now; later cursor moves or reloads do not retarget it.
    ctl.mode = ConfirmDeleteMode(target_id=task.id, target_name=task.title, return_to=return_to)


def handle_confirm_delete_key(ctl, mode: ConfirmDeleteMode, key: str) -> None:
    if key in ("y", "Y"):
        ctl.mode = NormalMode()
        ctl.comments.clear()
        delete_task(ctl, mode.target_id)
    elif key in ("n", "N", "escape"):
        ctl.mode = mode.return_to


def delete_task(ctl, task_id: int) -> None:
    store = ctl.store

    def work() -> TaskDeleted:
        store.delete_task(task_id)
        return TaskDeleted(task_id)

    ctl.defer("delete_task", work)


def toggle_assigned_tag(ctl, mode: AssigningTagsMode) -> None:
    """Flip the tag under the cursor on the target task and write it through."""
    tags = ctl.working_set.tags
    if not tags:
        return
    tag_id = tags[max(0, min(mode.cursor, len(tags) - 1))].id
    task_id = mode.task_id
    store = ctl.store

    def work() -> TagToggled:
        # Decide from persisted state so queued toggles do not act on a stale cache.
        attached = any(tag.id == tag_id for tag in store.get_task_tags(task_id))
        if attached:
            store.remove_tag_from_task(task_id, tag_id)
        else:
            store.add_tag_to_task(task_id, tag_id)
        return TagToggled(task_id, tag_id, attached=not attached)

    ctl.defer("toggle_tag", work)


def save_session(ctl, session) -> None:
    """Leave the form and persist it in the background; a blank title discards it."""
    draft = session.sync_draft()
    values = draft.values()
    ctl.mode = NormalMode()
    if values is None:
        return
    store = ctl.store
    project_id = ctl.project.id
    created = draft.is_new

    def work() -> TaskSaved:
        return TaskSaved(save_draft(store, project_id, draft, values), created=created)

    ctl.defer("save_task", work)


def submit_comment(ctl, mode: DetailMode) -> None:
    content = ctl.comments.submission()
    if content is None:
        return
    store = ctl.store
    task_id = mode.task_id

    def work() -> CommentCreated:
        return CommentCreated(task_id, store.create_comment(task_id, content))

    ctl.defer("create_comment", work)


__all__ = [
    "open_delete_confirm",
    "handle_confirm_delete_key",
    "delete_task",
    "toggle_assigned_tag",
    "save_session",
    "submit_comment",
]
