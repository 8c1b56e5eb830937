from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Immutable note attached to a task; threads are ordered oldest first."""

    id: int
    task_id: int
    content: str
    created_at: datetime = datetime.min
