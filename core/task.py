from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Set, Union

from .tag import Tag

PRIORITY_MIN = 0
PRIORITY_MAX = 10


def clamp_priority(value: Union[int, str, None]) -> int:
    """Parse a priority from user input and clamp it into [0, 10].

    Non-numeric input counts as 0.
    """
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value or "").strip())
        except ValueError:
            number = 0
    return max(PRIORITY_MIN, min(PRIORITY_MAX, number))


@dataclass
class Task:
    id: int
    project_id: int
    title: str
    description: str = ""
    notes: str = ""
    priority: int = 0
    created_at: datetime = datetime.min
    updated_at: datetime = datetime.min
    tags: List[Tag] = field(default_factory=list)

    def tag_ids(self) -> Set[int]:
        return {tag.id for tag in self.tags}

    def has_tag(self, tag_id: int) -> bool:
        return any(tag.id == tag_id for tag in self.tags)
