"""Comment composer shown under the task detail view."""

from typing import Optional

from prompt_toolkit.buffer import Buffer

from core.desktop.devtools.interface.constants import COMMENT_CHAR_LIMIT
from core.desktop.devtools.interface.tui_editing import apply_text_key, set_buffer_text


class CommentComposer:
    def __init__(self, char_limit: int = COMMENT_CHAR_LIMIT):
        self.char_limit = char_limit
        self.buffer = Buffer(multiline=True)

    @property
    def text(self) -> str:
        return self.buffer.text

    def handle_key(self, key: str) -> bool:
        return apply_text_key(self.buffer, key, self.char_limit, multiline=True)

    def submission(self) -> Optional[str]:
        """Trimmed content to submit, or None when there is nothing to send."""
        content = self.buffer.text.strip()
        return content or None

    def clear(self) -> None:
        set_buffer_text(self.buffer, "")


__all__ = ["CommentComposer"]
