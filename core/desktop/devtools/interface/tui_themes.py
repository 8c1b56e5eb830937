#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "tokyo-night": {
        "": "#c0caf5",
        "text": "#c0caf5",
        "text.dim": "#787c99",
        "text.dimmer": "#565f89",
        "header": "#7aa2f7 bold",
        "border": "#3b4261",
        "selected": "bg:#283457 #c0caf5 bold",
        "button": "#9aa5ce",
        "button.focused": "bg:#7aa2f7 #1a1b26 bold",
        "input": "#c0caf5",
        "input.focused": "bg:#24283b #c0caf5",
        "input.placeholder": "#565f89 italic",
        "cursor": "reverse",
        "priority.high": "#f7768e bold",
        "priority.mid": "#e0af68",
        "priority.low": "#787c99",
        "dialog": "bg:#1f2335 #c0caf5",
        "dialog.title": "bg:#1f2335 #f7768e bold",
        "status": "#9ece6a",
        "status.error": "#f7768e bold",
        "marker": "#9ece6a bold",
    },
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.dimmer": "#6d717a",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "button": "#97a0a9",
        "button.focused": "bg:#ffb347 #1c1c1c bold",
        "input": "#d7dfe6",
        "input.focused": "bg:#2f3336 #d7dfe6",
        "input.placeholder": "#6d717a italic",
        "cursor": "reverse",
        "priority.high": "#e06c75 bold",
        "priority.mid": "#e5c07b",
        "priority.low": "#7a7f85",
        "dialog": "bg:#262a2d #d7dfe6",
        "dialog.title": "bg:#262a2d #ff6b6b bold",
        "status": "#9ad974",
        "status.error": "#ff6b6b bold",
        "marker": "#9ad974 bold",
    },
}

DEFAULT_THEME = "tokyo-night"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    return Style.from_dict(get_theme_palette(theme))


def tag_style(color: str) -> str:
    """Inline style for a tag chip; falls back to plain text for unusable colors."""
    value = (color or "").strip()
    if len(value) == 7 and value.startswith("#"):
        try:
            int(value[1:], 16)
        except ValueError:
            return "class:text"
        return f"{value} bold"
    return "class:text"


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style", "tag_style"]
