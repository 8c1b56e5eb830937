from dataclasses import dataclass
from datetime import datetime


@dataclass
class Project:
    id: int
    title: str
    description: str = ""
    created_at: datetime = datetime.min
    updated_at: datetime = datetime.min
