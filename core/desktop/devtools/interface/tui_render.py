"""Rendering for the stm screens.

Renderers are pure: they read controller state and return FormattedText sized
for the given terminal; they never mutate the controller.
"""

from typing import List, Optional, Sequence, Tuple

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import FormattedText

from core import Tag, Task
from core.desktop.devtools.application.edit_session import FIELD_ORDER, FIELD_SPECS, EditField
from core.desktop.devtools.interface.constants import TIMESTAMP_FORMAT
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_display import display_width, pad_display, trim_display, wrap_display
from core.desktop.devtools.interface.tui_modes import (
    AssigningTagsMode,
    ConfirmDeleteMode,
    DetailMode,
    EditingMode,
    Focus,
    HelpMode,
    NormalMode,
    TagDropdownMode,
)
from core.desktop.devtools.interface.tui_projects import FORM_CREATE, FORM_DESCRIPTION, FORM_NAME, ProjectView
from core.desktop.devtools.interface.tui_themes import tag_style

Fragment = Tuple[str, str]

_FIELD_LABELS = {
    EditField.TITLE: "FIELD_TITLE",
    EditField.DESCRIPTION: "FIELD_DESCRIPTION",
    EditField.NOTES: "FIELD_NOTES",
    EditField.PRIORITY: "FIELD_PRIORITY",
    EditField.TAGS: "FIELD_TAGS",
}


class _Canvas:
    """Accumulates styled lines, never exceeding the screen height."""

    def __init__(self, width: int, height: int):
        self.width = max(1, width)
        self.height = max(1, height)
        self.lines: List[List[Fragment]] = []

    @property
    def remaining(self) -> int:
        return self.height - len(self.lines)

    def line(self, *fragments: Fragment) -> None:
        if self.remaining <= 0:
            return
        out: List[Fragment] = []
        used = 0
        for style, text in fragments:
            room = self.width - used
            if room <= 0:
                break
            piece = trim_display(text, room)
            out.append((style, piece))
            used += display_width(piece)
        self.lines.append(out)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self.line()

    def text_block(self, text: str, style: str = "class:text", indent: str = "", max_lines: Optional[int] = None) -> None:
        wrapped = wrap_display(text, self.width - display_width(indent))
        if max_lines is not None:
            wrapped = wrapped[:max_lines]
        for row in wrapped:
            self.line(("class:text", indent), (style, row))

    def fill_to(self, rows_left: int) -> None:
        """Pad with blank lines until only `rows_left` rows remain."""
        while self.remaining > rows_left:
            self.line()

    def build(self) -> FormattedText:
        fragments: List[Fragment] = []
        for idx, line in enumerate(self.lines):
            if idx:
                fragments.append(("", "\n"))
            fragments.extend(line)
        return FormattedText(fragments)


def _merge_style(selected_style: Optional[str], fragment_style: str) -> str:
    if not selected_style:
        return fragment_style
    return f"{selected_style} {fragment_style}".strip()


def _priority_style(priority: int) -> str:
    if priority >= 7:
        return "class:priority.high"
    if priority >= 4:
        return "class:priority.mid"
    return "class:priority.low"


def _tag_chips(tags: Sequence[Tag], selected_style: Optional[str] = None) -> List[Fragment]:
    chips: List[Fragment] = []
    for tag in tags:
        chips.append((_merge_style(selected_style, tag_style(tag.color)), f"[{tag.name}]"))
        chips.append((_merge_style(selected_style, "class:text"), " "))
    return chips


def _buffer_lines(buffer: Buffer, focused: bool, placeholder: str = "") -> List[List[Fragment]]:
    """Render a buffer line by line with a block cursor when focused."""
    text = buffer.text
    if not text and not focused:
        return [[("class:input.placeholder", placeholder)]] if placeholder else [[("class:input", "")]]
    base = "class:input.focused" if focused else "class:input"
    if not focused:
        return [[(base, row)] for row in text.split("\n")]
    row, col = buffer.document.cursor_position_row, buffer.document.cursor_position_col
    lines: List[List[Fragment]] = []
    for idx, line_text in enumerate(text.split("\n")):
        if idx != row:
            lines.append([(base, line_text)])
            continue
        under = line_text[col:col + 1] or " "
        lines.append([(base, line_text[:col]), ("class:cursor", under), (base, line_text[col + 1:])])
    return lines


def _status_line(canvas: _Canvas, ctl, footer_key: str) -> None:
    status = ctl.current_status()
    canvas.fill_to(2)
    canvas.line(("class:status", status) if status else ("class:text", ""))
    canvas.line(("class:text.dimmer", translate(footer_key)))


# ------------------------------------------------------------------ task screen
def _header(canvas: _Canvas, ctl, focus: Optional[Focus]) -> None:
    back_style = "class:button.focused" if focus is Focus.BACK_BUTTON else "class:button"
    canvas.line((back_style, translate("BACK_BUTTON")), ("class:text", "  "), ("class:header", ctl.project.title))
    canvas.blank()

    searching = focus is Focus.SEARCH_INPUT
    search_lines = _buffer_lines(ctl.search_buffer, searching, translate("SEARCH_PLACEHOLDER"))
    canvas.line(("class:text.dim", translate("SEARCH_LABEL")), *search_lines[0])

    ws = ctl.working_set
    dropdown_style = "class:button.focused" if focus is Focus.TAG_DROPDOWN else "class:button"
    label = ws.filter_label() or translate("FILTER_NONE")
    filter_frags: List[Fragment] = [("class:text.dim", translate("FILTER_LABEL")), (dropdown_style, f"[{label} v]")]
    if ws.showing_completed:
        filter_frags += [("class:text", "  "), ("class:marker", translate("COMPLETED_MARKER"))]
    canvas.line(*filter_frags)
    canvas.line(("class:border", "─" * canvas.width))


def _task_rows(canvas: _Canvas, ctl, highlight: bool) -> None:
    ws = ctl.working_set
    if not ws.loaded:
        canvas.line(("class:text.dim", translate("LOADING")))
        return
    if not ws.tasks:
        key = "NO_TASKS_COMPLETED" if ws.showing_completed else "NO_TASKS"
        canvas.line(("class:text.dim", translate(key)))
        return
    for idx in ctl.viewport.visible_range(len(ws.tasks)):
        task = ws.tasks[idx]
        selected = "class:selected" if highlight and idx == ws.cursor else None
        marker = "> " if idx == ws.cursor else "  "
        prio = translate("PRIORITY_SHORT", priority=task.priority)
        canvas.line(
            (_merge_style(selected, "class:text"), marker),
            (_merge_style(selected, _priority_style(task.priority)), pad_display(prio, 4)),
            (_merge_style(selected, "class:text"), task.title),
        )
        second: List[Fragment] = [(_merge_style(selected, "class:text"), "      ")]
        second += _tag_chips(task.tags, selected)
        snippet = task.description.split("\n", 1)[0] if task.description else ""
        second.append((_merge_style(selected, "class:text.dim"), snippet))
        canvas.line(*second)
        canvas.blank()


def _dropdown(canvas: _Canvas, ctl, mode: TagDropdownMode) -> None:
    canvas.line(("class:header", translate("DROPDOWN_TITLE")))
    options: List[Tuple[str, str]] = [("class:text", translate("FILTER_NONE"))]
    options += [(tag_style(tag.color), tag.name) for tag in ctl.working_set.tags]
    for idx, (style, name) in enumerate(options):
        selected = "class:selected" if idx == mode.cursor else None
        canvas.line((_merge_style(selected, "class:text"), "> " if selected else "  "), (_merge_style(selected, style), name))


def _assign_panel(canvas: _Canvas, ctl, mode: AssigningTagsMode) -> None:
    task = ctl.working_set.task_by_id(mode.task_id)
    canvas.line(("class:header", translate("ASSIGN_TAGS_TITLE")), ("class:text.dim", f"  {task.title if task else ''}"))
    tags = ctl.working_set.tags
    if not tags:
        canvas.line(("class:text.dim", translate("NO_TAGS")))
        return
    attached = task.tag_ids() if task else set()
    for idx, tag in enumerate(tags):
        selected = "class:selected" if idx == mode.cursor else None
        box = "[x] " if tag.id in attached else "[ ] "
        canvas.line((_merge_style(selected, "class:text"), box), (_merge_style(selected, tag_style(tag.color)), tag.name))


def _edit_form(canvas: _Canvas, ctl, mode: EditingMode) -> None:
    session = mode.session
    title_key = "EDIT_TITLE_NEW" if session.is_new else "EDIT_TITLE_EXISTING"
    canvas.line(("class:header", translate(title_key)))
    canvas.blank()
    for edit_field in FIELD_ORDER:
        focused = session.field is edit_field
        if edit_field is EditField.SAVE:
            canvas.blank()
            canvas.line(("class:button.focused" if focused else "class:button", translate("BUTTON_SAVE")))
            continue
        label_style = "class:header" if focused else "class:text.dim"
        canvas.line((label_style, translate(_FIELD_LABELS[edit_field])))
        if edit_field is EditField.TAGS:
            _edit_tags(canvas, ctl, session, focused)
            continue
        rows = _buffer_lines(session.buffer(edit_field), focused)
        if not FIELD_SPECS[edit_field].multiline:
            rows = rows[:1]
        for row in rows:
            canvas.line(("class:text", "  "), *row)


def _edit_tags(canvas: _Canvas, ctl, session, focused: bool) -> None:
    tags = ctl.working_set.tags
    if not tags:
        canvas.line(("class:text.dim", "  " + translate("NO_TAGS")))
        return
    frags: List[Fragment] = [("class:text", "  ")]
    for idx, tag in enumerate(tags):
        mark = "x" if session.draft.has_tag(tag.id) else " "
        style = tag_style(tag.color)
        if focused and idx == session.tag_cursor:
            style = _merge_style("class:selected", style)
        frags.append((style, f"[{mark}] {tag.name}"))
        frags.append(("class:text", "  "))
    canvas.line(*frags)


def _detail(canvas: _Canvas, ctl, mode: DetailMode) -> None:
    task: Optional[Task] = ctl.working_set.task_by_id(mode.task_id)
    if task is None:
        return
    canvas.line(("class:header", task.title))
    meta: List[Fragment] = [(_priority_style(task.priority), translate("DETAIL_PRIORITY", priority=task.priority)), ("class:text", "  ")]
    meta += _tag_chips(task.tags)
    canvas.line(*meta)
    canvas.line(
        ("class:text.dimmer", translate("DETAIL_CREATED", created=_fmt_ts(task.created_at))),
        ("class:text.dimmer", "  " + translate("DETAIL_UPDATED", updated=_fmt_ts(task.updated_at))),
    )
    canvas.blank()
    if task.description:
        canvas.line(("class:text.dim", translate("FIELD_DESCRIPTION")))
        canvas.text_block(task.description, indent="  ", max_lines=6)
    if task.notes:
        canvas.line(("class:text.dim", translate("FIELD_NOTES")))
        canvas.text_block(task.notes, indent="  ", max_lines=6)
    canvas.line(("class:border", "─" * canvas.width))
    canvas.line(("class:header", translate("DETAIL_COMMENTS")), ("class:text.dim", f" ({len(mode.comments)})"))
    input_rows = max(1, ctl.comments.text.count("\n") + 1)
    room = max(0, canvas.remaining - input_rows - 4)
    if not mode.comments:
        canvas.line(("class:text.dim", translate("DETAIL_NO_COMMENTS")))
    else:
        comment_lines: List[List[Fragment]] = []
        for comment in mode.comments:
            comment_lines.append([("class:text.dimmer", _fmt_ts(comment.created_at))])
            for row in wrap_display(comment.content, canvas.width - 2):
                comment_lines.append([("class:text", "  " + row)])
        # Newest comments stay visible when the thread overflows.
        for line in comment_lines[-room:] if room else []:
            canvas.line(*line)
    canvas.blank()
    for row in _buffer_lines(ctl.comments.buffer, mode.comment_focused, translate("COMMENT_PLACEHOLDER")):
        canvas.line(("class:text", "> "), *row)


def _fmt_ts(value) -> str:
    try:
        return value.strftime(TIMESTAMP_FORMAT)
    except (AttributeError, ValueError):
        return "-"


def _confirm(canvas: _Canvas, name: str) -> None:
    canvas.blank()
    canvas.line(("class:dialog.title", " " + translate("CONFIRM_DELETE", name=name) + " "))
    canvas.line(("class:dialog", " " + translate("CONFIRM_DELETE_HINT") + " "))


def _help(canvas: _Canvas, key: str) -> None:
    canvas.line(("class:header", translate("HELP_TITLE")))
    canvas.blank()
    for row in translate(key).split("\n"):
        canvas.line(("class:text", "  " + row))
    canvas.blank()
    canvas.line(("class:text.dim", translate("HELP_CLOSE")))


def _task_footer_key(mode) -> str:
    if isinstance(mode, NormalMode) and mode.focus is Focus.SEARCH_INPUT:
        return "FOOTER_SEARCH"
    if isinstance(mode, EditingMode):
        return "FOOTER_EDIT"
    if isinstance(mode, DetailMode):
        return "FOOTER_COMMENT" if mode.comment_focused else "FOOTER_DETAIL"
    if isinstance(mode, AssigningTagsMode):
        return "FOOTER_ASSIGN"
    if isinstance(mode, TagDropdownMode):
        return "FOOTER_DROPDOWN"
    if isinstance(mode, ConfirmDeleteMode):
        return "CONFIRM_DELETE_HINT"
    if isinstance(mode, HelpMode):
        return "HELP_CLOSE"
    return "FOOTER_NORMAL"


def render_task_screen(ctl, width: int, height: int) -> FormattedText:
    canvas = _Canvas(width, height)
    mode = ctl.mode
    focus = mode.focus if isinstance(mode, NormalMode) else None
    if isinstance(mode, EditingMode):
        _edit_form(canvas, ctl, mode)
    elif isinstance(mode, DetailMode):
        _detail(canvas, ctl, mode)
    elif isinstance(mode, HelpMode):
        _help(canvas, "HELP_TASKS")
    else:
        _header(canvas, ctl, focus)
        if isinstance(mode, TagDropdownMode):
            _dropdown(canvas, ctl, mode)
        elif isinstance(mode, AssigningTagsMode):
            _assign_panel(canvas, ctl, mode)
        elif isinstance(mode, ConfirmDeleteMode):
            _confirm(canvas, mode.target_name)
        else:
            _task_rows(canvas, ctl, highlight=focus is Focus.TASK_LIST)
    _status_line(canvas, ctl, _task_footer_key(mode))
    return canvas.build()


# --------------------------------------------------------------- project screen
def render_project_screen(ctl, width: int, height: int) -> FormattedText:
    canvas = _Canvas(width, height)
    view = ctl.view
    footer = "FOOTER_PROJECTS"
    if view is ProjectView.HELP:
        _help(canvas, "HELP_PROJECTS")
        footer = "HELP_CLOSE"
    elif view is ProjectView.FORM:
        footer = "FOOTER_PROJECT_FORM"
        canvas.line(("class:header", translate("PROJECT_FORM_TITLE")))
        canvas.blank()
        for field_id, label_key, buffer in (
            (FORM_NAME, "FIELD_NAME", ctl.name_buffer),
            (FORM_DESCRIPTION, "FIELD_PROJECT_DESCRIPTION", ctl.description_buffer),
        ):
            focused = ctl.form_field == field_id
            canvas.line(("class:header" if focused else "class:text.dim", translate(label_key)))
            canvas.line(("class:text", "  "), *_buffer_lines(buffer, focused)[0])
        canvas.blank()
        button_style = "class:button.focused" if ctl.form_field == FORM_CREATE else "class:button"
        canvas.line((button_style, translate("BUTTON_CREATE")))
    else:
        canvas.line(("class:header", translate("PROJECTS_TITLE")))
        canvas.line(("class:border", "─" * canvas.width))
        if view is ProjectView.CONFIRM_DELETE and ctl.delete_target is not None:
            _confirm(canvas, ctl.delete_target.title)
            footer = "CONFIRM_DELETE_HINT"
        elif not ctl.loaded:
            canvas.line(("class:text.dim", translate("LOADING")))
        elif not ctl.projects:
            canvas.line(("class:text.dim", translate("NO_PROJECTS")))
        else:
            visible = max(1, (canvas.height - 6) // 2)
            start = max(0, ctl.cursor - visible + 1)
            for idx, project in enumerate(ctl.projects[start:start + visible], start=start):
                selected = "class:selected" if idx == ctl.cursor else None
                marker = "> " if selected else "  "
                canvas.line((_merge_style(selected, "class:text"), marker + project.title))
                canvas.line((_merge_style(selected, "class:text.dim"), "    " + (project.description or "")))
    _status_line(canvas, ctl, footer)
    return canvas.build()


__all__ = ["render_task_screen", "render_project_screen"]
