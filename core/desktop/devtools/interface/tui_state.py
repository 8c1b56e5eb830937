"""Applying loaded data to the task screen and repairing state that went stale."""

from dataclasses import replace

from core.desktop.devtools.interface.tui_events import CommentsLoaded, TagsLoaded, TasksLoaded
from core.desktop.devtools.interface.tui_modes import (
    AssigningTagsMode,
    ConfirmDeleteMode,
    DetailMode,
    HelpMode,
    Mode,
    NormalMode,
    TagDropdownMode,
    task_bound_id,
)


def reconcile_mode(mode: Mode, working_set) -> Mode:
    """Close modes (also nested ones) whose task is no longer in the list."""
    task_id = task_bound_id(mode)
    if task_id is not None and not working_set.contains(task_id):
        return NormalMode()
    if isinstance(mode, ConfirmDeleteMode):
        return replace(mode, return_to=reconcile_mode(mode.return_to, working_set))
    if isinstance(mode, HelpMode):
        return replace(mode, prior=reconcile_mode(mode.prior, working_set))
    return mode


def reconcile(ctl) -> None:
    ws = ctl.working_set
    ws.clamp_cursor()
    ctl.viewport.ensure_visible(ws.cursor, len(ws))
    before = ctl.mode
    after = reconcile_mode(before, ws)
    if after != before:
        ctl.logger.debug("closing %s: task left the list", type(before).__name__)
        if isinstance(before, DetailMode) and not isinstance(after, DetailMode):
            ctl.comments.clear()
        ctl.mode = after


def apply_tasks_loaded(ctl, event: TasksLoaded) -> None:
    ws = ctl.working_set
    if not ws.is_current(event.generation):
        ctl.logger.debug("dropping stale reload %s (current %s)", event.generation, ws.generation)
        return
    ws.apply_loaded(event.tasks, event.complete_tag_id)
    reconcile(ctl)


def apply_tags_loaded(ctl, event: TagsLoaded) -> None:
    ws = ctl.working_set
    ws.apply_tags(event.tags)
    mode = ctl.mode
    if isinstance(mode, TagDropdownMode):
        ctl.mode = TagDropdownMode(cursor=min(mode.cursor, len(ws.tags)))
    elif isinstance(mode, AssigningTagsMode):
        ctl.mode = replace(mode, cursor=max(0, min(mode.cursor, len(ws.tags) - 1)))


def apply_comments_loaded(ctl, event: CommentsLoaded) -> None:
    mode = ctl.mode
    if isinstance(mode, DetailMode) and mode.task_id == event.task_id:
        ctl.mode = replace(mode, comments=tuple(event.comments))


__all__ = ["reconcile_mode", "reconcile", "apply_tasks_loaded", "apply_tags_loaded", "apply_comments_loaded"]
