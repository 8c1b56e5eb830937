from .errors import DataError
from .project import Project
from .tag import (
    COMPLETE_TAG_NAME,
    DEFAULT_STATUS_TAGS,
    DEFAULT_TAG_COLOR,
    STATUS_GROUP_NAME,
    Tag,
    TagGroup,
)
from .task import PRIORITY_MAX, PRIORITY_MIN, Task, clamp_priority
from .comment import Comment

__all__ = [
    "DataError",
    "Project",
    "Task",
    "Tag",
    "TagGroup",
    "Comment",
    "clamp_priority",
    "PRIORITY_MIN",
    "PRIORITY_MAX",
    # Tags
    "COMPLETE_TAG_NAME",
    "DEFAULT_STATUS_TAGS",
    "DEFAULT_TAG_COLOR",
    "STATUS_GROUP_NAME",
]
