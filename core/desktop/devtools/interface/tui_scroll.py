"""Vertical scrolling of the task list."""

from dataclasses import dataclass

ROWS_PER_ITEM = 3
CHROME_ROWS = 12


@dataclass
class Viewport:
    """Window of list items that fits on screen.

    Keeps ``scroll <= cursor < scroll + visible_count`` after every call to
    `ensure_visible`; scroll only moves when that would otherwise break.
    """

    height: int = 24
    scroll: int = 0
    rows_per_item: int = ROWS_PER_ITEM
    chrome_rows: int = CHROME_ROWS

    @property
    def visible_count(self) -> int:
        return max(1, (self.height - self.chrome_rows) // self.rows_per_item)

    def resize(self, height: int) -> None:
        self.height = max(0, int(height))

    def reset(self) -> None:
        self.scroll = 0

    def ensure_visible(self, cursor: int, total: int) -> None:
        if total <= 0:
            self.scroll = 0
            return
        visible = self.visible_count
        if cursor < self.scroll:
            self.scroll = cursor
        elif cursor >= self.scroll + visible:
            self.scroll = cursor - visible + 1
        self.scroll = max(0, self.scroll)

    def visible_range(self, total: int) -> range:
        start = min(self.scroll, max(0, total))
        return range(start, min(total, start + self.visible_count))


__all__ = ["Viewport", "ROWS_PER_ITEM", "CHROME_ROWS"]
