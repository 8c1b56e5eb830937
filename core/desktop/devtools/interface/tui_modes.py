"""View modes of the task screen.

Each mode carries only the data that is meaningful while it is active, so a
stale detail id or tag cursor cannot outlive the mode that owns it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from core import Comment

if TYPE_CHECKING:
    from core.desktop.devtools.interface.tui_editing import EditSession


class Focus(Enum):
    BACK_BUTTON = "back"
    SEARCH_INPUT = "search"
    TAG_DROPDOWN = "dropdown"
    TASK_LIST = "list"


FOCUS_ORDER: Tuple[Focus, ...] = tuple(Focus)


def cycle_focus(current: Focus, delta: int) -> Focus:
    idx = FOCUS_ORDER.index(current)
    return FOCUS_ORDER[(idx + delta) % len(FOCUS_ORDER)]


@dataclass(frozen=True)
class NormalMode:
    focus: Focus = Focus.TASK_LIST


@dataclass(frozen=True)
class TagDropdownMode:
    # 0 is the "None" entry, i maps to tags[i - 1].
    cursor: int = 0


@dataclass(frozen=True)
class EditingMode:
    session: "EditSession"


@dataclass(frozen=True)
class DetailMode:
    task_id: int
    comments: Tuple[Comment, ...] = ()
    comment_focused: bool = False


@dataclass(frozen=True)
class AssigningTagsMode:
    task_id: int
    cursor: int = 0


@dataclass(frozen=True)
class ConfirmDeleteMode:
    target_id: int
    target_name: str
    return_to: "Mode"


@dataclass(frozen=True)
class HelpMode:
    prior: "Mode"


Mode = Union[
    NormalMode,
    TagDropdownMode,
    EditingMode,
    DetailMode,
    AssigningTagsMode,
    ConfirmDeleteMode,
    HelpMode,
]


def task_bound_id(mode: Mode) -> Optional[int]:
    """Task id a mode depends on, if any."""
    if isinstance(mode, (DetailMode, AssigningTagsMode)):
        return mode.task_id
    return None


__all__ = [
    "Focus",
    "FOCUS_ORDER",
    "cycle_focus",
    "NormalMode",
    "TagDropdownMode",
    "EditingMode",
    "DetailMode",
    "AssigningTagsMode",
    "ConfirmDeleteMode",
    "HelpMode",
    "Mode",
    "task_bound_id",
]
