"""Display-width helpers: wide characters (CJK, emoji) take two cells."""

from typing import List

from wcwidth import wcwidth


def char_width(ch: str) -> int:
    return max(0, wcwidth(ch) or 0)


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    return sum(char_width(ch) for ch in text)


def trim_display(text: str, width: int, ellipsis: str = "") -> str:
    """Trim text to at most `width` cells, ending with `ellipsis` when cut."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - display_width(ellipsis)
    if budget < 0:
        return ""
    acc = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > budget:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + ellipsis


def pad_display(text: str, width: int) -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    return trimmed + " " * max(0, width - display_width(trimmed))


def wrap_display(text: str, width: int) -> List[str]:
    """Wrap text (respecting its own newlines) into lines of at most `width` cells."""
    width = max(1, width)
    lines: List[str] = []
    for raw_line in (text or "").split("\n"):
        current = ""
        used = 0
        for ch in raw_line:
            w = char_width(ch)
            if used + w > width and current:
                lines.append(current)
                current, used = ch, w
            else:
                current += ch
                used += w
        lines.append(current)
    return lines


__all__ = ["char_width", "display_width", "trim_display", "pad_display", "wrap_display"]
