"""Edit form of the task screen: one prompt_toolkit Buffer per text field."""

from enum import Enum
from typing import Dict, List, Optional

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document

from core import Tag
from core.desktop.devtools.application.edit_session import (
    FIELD_SPECS,
    TEXT_FIELDS,
    EditDraft,
    EditField,
    cycle_field,
)


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def apply_text_key(buffer: Buffer, key: str, char_limit: int = 0, multiline: bool = False) -> bool:
    """Apply an editing key to `buffer`; returns True when the key was consumed."""
    if key == "backspace":
        buffer.delete_before_cursor(1)
        return True
    if key == "delete":
        buffer.delete(1)
        return True
    if key == "left":
        buffer.cursor_left()
        return True
    if key == "right":
        buffer.cursor_right()
        return True
    if key == "home":
        buffer.cursor_position += buffer.document.get_start_of_line_position()
        return True
    if key == "end":
        buffer.cursor_position += buffer.document.get_end_of_line_position()
        return True
    if multiline and key in ("up", "down"):
        if key == "up":
            buffer.cursor_up()
        else:
            buffer.cursor_down()
        return True
    if key == "enter":
        if not multiline:
            return False
        key = "\n"
    elif not is_printable(key):
        return False
    if not char_limit or len(buffer.text) + len(key) <= char_limit:
        buffer.insert_text(key)
    return True


def set_buffer_text(buffer: Buffer, text: str) -> None:
    buffer.set_document(Document(text, len(text)), bypass_readonly=True)


class EditOutcome(Enum):
    NONE = "none"
    SAVE = "save"
    CANCEL = "cancel"
    TOGGLED = "toggled"


class EditSession:
    """Live edit form state: draft, buffers, focused field and tag cursor."""

    def __init__(self, draft: EditDraft):
        self.draft = draft
        self.field = EditField.TITLE
        self.tag_cursor = 0
        self.buffers: Dict[EditField, Buffer] = {}
        for edit_field in TEXT_FIELDS:
            buf = Buffer(multiline=FIELD_SPECS[edit_field].multiline)
            set_buffer_text(buf, draft.get_text(edit_field))
            self.buffers[edit_field] = buf

    @property
    def is_new(self) -> bool:
        return self.draft.is_new

    def buffer(self, edit_field: EditField) -> Optional[Buffer]:
        return self.buffers.get(edit_field)

    def sync_draft(self) -> EditDraft:
        for edit_field, buf in self.buffers.items():
            self.draft.set_text(edit_field, buf.text)
        return self.draft

    def focus_next(self, delta: int = 1) -> None:
        self.field = cycle_field(self.field, delta)

    def move_tag_cursor(self, delta: int, total: int) -> None:
        if total <= 0:
            self.tag_cursor = 0
            return
        self.tag_cursor = max(0, min(self.tag_cursor + delta, total - 1))

    def toggle_tag_at_cursor(self, tags: List[Tag]) -> bool:
        if not tags:
            return False
        self.tag_cursor = max(0, min(self.tag_cursor, len(tags) - 1))
        self.draft.toggle_tag(tags[self.tag_cursor].id)
        return True

    def handle_key(self, key: str, tags: List[Tag]) -> EditOutcome:
        if key == "escape":
            return EditOutcome.CANCEL
        if key == "c-s":
            self.sync_draft()
            return EditOutcome.SAVE
        if key == "tab":
            self.focus_next(1)
            return EditOutcome.NONE
        if key == "s-tab":
            self.focus_next(-1)
            return EditOutcome.NONE

        if self.field is EditField.SAVE:
            if key == "enter":
                self.sync_draft()
                return EditOutcome.SAVE
            return EditOutcome.NONE

        if self.field is EditField.TAGS:
            if key in ("enter", " "):
                return EditOutcome.TOGGLED if self.toggle_tag_at_cursor(tags) else EditOutcome.NONE
            if key == "up":
                self.move_tag_cursor(-1, len(tags))
            elif key == "down":
                self.move_tag_cursor(1, len(tags))
            return EditOutcome.NONE

        spec = FIELD_SPECS[self.field]
        if key == "enter" and spec.enter_advances:
            self.focus_next(1)
            return EditOutcome.NONE
        buf = self.buffers[self.field]
        if apply_text_key(buf, key, spec.char_limit, spec.multiline):
            self.draft.set_text(self.field, buf.text)
        return EditOutcome.NONE


__all__ = ["EditOutcome", "EditSession", "apply_text_key", "set_buffer_text", "is_printable"]
