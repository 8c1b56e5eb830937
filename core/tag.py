"""Tags and tag groups.

Tags inside one group are mutually exclusive on a task (radio-button
behaviour). The seeded "Status" group carries the workflow tags; the tag named
``complete`` hides tasks from the default task list.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Final, Optional, Tuple

DEFAULT_TAG_COLOR: Final[str] = "#7aa2f7"
STATUS_GROUP_NAME: Final[str] = "Status"
COMPLETE_TAG_NAME: Final[str] = "complete"

# (name, color) seeded into the Status group on first open.
DEFAULT_STATUS_TAGS: Final[Tuple[Tuple[str, str], ...]] = (
    ("design", "#bb9af7"),
    ("todo", "#7aa2f7"),
    ("active", "#e0af68"),
    ("complete", "#9ece6a"),
)


@dataclass
class TagGroup:
    id: int
    name: str
    created_at: datetime = datetime.min


@dataclass
class Tag:
    id: int
    name: str
    color: str = DEFAULT_TAG_COLOR
    group_id: Optional[int] = None
    created_at: datetime = datetime.min

    @property
    def grouped(self) -> bool:
        return self.group_id is not None

    def is_complete_marker(self) -> bool:
        return self.name.lower() == COMPLETE_TAG_NAME
