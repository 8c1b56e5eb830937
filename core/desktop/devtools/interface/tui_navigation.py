"""Navigation helpers for the task screen controller."""

from core.desktop.devtools.interface.tui_modes import AssigningTagsMode, TagDropdownMode


def move_vertical_selection(ctl, delta: int) -> None:
    """
    Move the active pointer by `delta`, clamping to available items.

    Works for the task list, the tag filter dropdown (None + tags) and the tag
    assignment panel.
    """
    mode = ctl.mode
    if isinstance(mode, TagDropdownMode):
        total = len(ctl.working_set.tags) + 1
        ctl.mode = TagDropdownMode(cursor=max(0, min(mode.cursor + delta, total - 1)))
        return
    if isinstance(mode, AssigningTagsMode):
        total = len(ctl.working_set.tags)
        if total <= 0:
            return
        ctl.mode = AssigningTagsMode(mode.task_id, cursor=max(0, min(mode.cursor + delta, total - 1)))
        return
    ws = ctl.working_set
    total = len(ws)
    if total <= 0:
        ws.cursor = 0
        ctl.viewport.reset()
        return
    ws.cursor = max(0, min(ws.cursor + delta, total - 1))
    ctl.viewport.ensure_visible(ws.cursor, total)


def page_size(ctl) -> int:
    return ctl.viewport.visible_count


__all__ = ["move_vertical_selection", "page_size"]
