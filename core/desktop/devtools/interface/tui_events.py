"""Events consumed by the screen controllers and the shared dispatch queue."""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, List, Optional, Tuple

from core import Comment, Project, Tag, Task
from core.desktop.devtools.interface.constants import STATUS_TTL


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


# ----------------------------------------------------------------- results
@dataclass(frozen=True)
class TasksLoaded:
    generation: int
    complete_tag_id: Optional[int]
    tasks: List[Task] = field(default_factory=list)


@dataclass(frozen=True)
class TagsLoaded:
    tags: List[Tag] = field(default_factory=list)


@dataclass(frozen=True)
class CommentsLoaded:
    task_id: int
    comments: Tuple[Comment, ...] = ()


@dataclass(frozen=True)
class TaskSaved:
    task_id: int
    created: bool = False


@dataclass(frozen=True)
class TaskDeleted:
    task_id: int


@dataclass(frozen=True)
class TagToggled:
    task_id: int
    tag_id: int
    attached: bool


@dataclass(frozen=True)
class CommentCreated:
    task_id: int
    comment: Comment


@dataclass(frozen=True)
class DataFailed:
    operation: str
    error: str


@dataclass(frozen=True)
class ProjectsLoaded:
    projects: List[Project] = field(default_factory=list)
    last_project_id: Optional[int] = None


@dataclass(frozen=True)
class ProjectCreated:
    project: Project


@dataclass(frozen=True)
class ProjectDeleted:
    project_id: int


class EventDispatcher:
    """FIFO event queue shared by the screen controllers.

    `dispatch` may be called from inside a handler (inline work results, for
    instance); such events are queued and handled after the current one
    returns, never re-entrantly.
    """

    logger = logging.getLogger("stm.app")

    def __init__(self, runner, on_change: Optional[Callable[[], None]] = None):
        self.runner = runner
        self.on_change = on_change
        self.status_message: str = ""
        self.status_expires: float = 0.0
        self._queue: Deque[Any] = deque()
        self._dispatching = False

    def dispatch(self, event: Any) -> None:
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self.handle_event(self._queue.popleft())
        finally:
            self._dispatching = False
        if self.on_change:
            self.on_change()

    def handle_event(self, event: Any) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def defer(self, operation: str, work: Callable[[], Any]) -> None:
        """Run `work` through the runner; its result event comes back via dispatch."""
        self.runner.submit(operation, work, self.dispatch)

    def set_status_message(self, message: str, ttl: float = STATUS_TTL) -> None:
        self.status_message = message
        self.status_expires = time.monotonic() + ttl

    def current_status(self) -> str:
        if self.status_message and time.monotonic() < self.status_expires:
            return self.status_message
        return ""

    def report_failure(self, event: DataFailed, text: str) -> None:
        self.logger.warning("%s failed: %s", event.operation, event.error)
        self.set_status_message(text, ttl=STATUS_TTL * 2)


__all__ = [
    "KeyPress",
    "Resize",
    "TasksLoaded",
    "TagsLoaded",
    "CommentsLoaded",
    "TaskSaved",
    "TaskDeleted",
    "TagToggled",
    "CommentCreated",
    "DataFailed",
    "ProjectsLoaded",
    "ProjectCreated",
    "ProjectDeleted",
    "EventDispatcher",
]
