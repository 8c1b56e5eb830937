"""Cached, filtered task list backing the task screen.

The working set is the only place that knows which tasks are visible. It keeps
the filter parameters, the "show completed" stash and the cursor, and repairs
the cursor after every reload (the list may shrink or reorder under it).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from application.ports import TaskStore
from core import COMPLETE_TAG_NAME, Tag, Task


@dataclass(frozen=True)
class FilterParams:
    """Snapshot of the filter taken when a reload is requested."""

    project_id: int
    search: str = ""
    tag_id: Optional[int] = None
    showing_completed: bool = False
    complete_tag_id: Optional[int] = None

    @property
    def exclude_tag_id(self) -> Optional[int]:
        if self.showing_completed:
            return None
        return self.complete_tag_id


def fetch_tasks(store: TaskStore, params: FilterParams) -> Tuple[Optional[int], List[Task]]:
    """Run the filtered query for `params`.

    Resolves the id of the ``complete`` tag on first use and returns it with
    the tasks so the caller can cache it.
    """
    complete_id = params.complete_tag_id
    if complete_id is None:
        complete = store.get_tag_by_name(COMPLETE_TAG_NAME)
        complete_id = complete.id if complete else None
    tag_id = params.tag_id
    if params.showing_completed and tag_id is None:
        tag_id = complete_id
    exclude = None if params.showing_completed else complete_id
    tasks = store.list_tasks_filtered(params.project_id, params.search, tag_id, exclude)
    return complete_id, tasks


class WorkingSet:
    def __init__(self, project_id: int):
        self.project_id = project_id
        self.tasks: List[Task] = []
        self.tags: List[Tag] = []
        self.loaded: bool = False
        self.cursor: int = 0
        self.search: str = ""
        self.selected_tag_id: Optional[int] = None
        self.showing_completed: bool = False
        self.complete_tag_id: Optional[int] = None
        self._pre_completed_tag_id: Optional[int] = None
        # Task id to select once it shows up in the next applied reload.
        self.pending_select_id: Optional[int] = None
        self._generation: int = 0

    # ---------------------------------------------------------------- filters
    def filter_params(self) -> FilterParams:
        return FilterParams(
            project_id=self.project_id,
            search=self.search.strip(),
            tag_id=self.selected_tag_id,
            showing_completed=self.showing_completed,
            complete_tag_id=self.complete_tag_id,
        )

    def set_search(self, text: str) -> None:
        self.search = text or ""

    def set_tag_filter(self, tag_id: Optional[int]) -> None:
        self.selected_tag_id = tag_id

    def toggle_show_completed(self) -> None:
        """Swap the tag filter with the completed tag, stashing the previous one."""
        if self.showing_completed:
            self.showing_completed = False
            self.selected_tag_id = self._pre_completed_tag_id
            self._pre_completed_tag_id = None
        else:
            self._pre_completed_tag_id = self.selected_tag_id
            self.showing_completed = True
            self.selected_tag_id = self.complete_tag_id
        self.cursor = 0

    # ----------------------------------------------------------------- reload
    @property
    def generation(self) -> int:
        return self._generation

    def begin_reload(self) -> Tuple[int, FilterParams]:
        """Start a new reload generation; results of older ones become stale."""
        self._generation += 1
        return self._generation, self.filter_params()

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def apply_loaded(self, tasks: List[Task], complete_tag_id: Optional[int] = None) -> None:
        self.tasks = list(tasks)
        self.loaded = True
        if complete_tag_id is not None:
            self.complete_tag_id = complete_tag_id
            if self.showing_completed and self.selected_tag_id is None:
                self.selected_tag_id = complete_tag_id
        if self.pending_select_id is not None:
            index = self.index_of(self.pending_select_id)
            if index is not None:
                self.cursor = index
            self.pending_select_id = None
        self.clamp_cursor()

    def apply_tags(self, tags: List[Tag]) -> None:
        self.tags = list(tags)
        if self.complete_tag_id is None:
            for tag in self.tags:
                if tag.is_complete_marker():
                    self.complete_tag_id = tag.id
                    break
        if self.selected_tag_id is not None and self.tag_by_id(self.selected_tag_id) is None:
            # Filter tag was deleted elsewhere.
            self.selected_tag_id = None

    def clamp_cursor(self) -> None:
        if not self.tasks:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor, len(self.tasks) - 1))

    # ---------------------------------------------------------------- lookups
    def __len__(self) -> int:
        return len(self.tasks)

    def current_task(self) -> Optional[Task]:
        if not self.tasks or not (0 <= self.cursor < len(self.tasks)):
            return None
        return self.tasks[self.cursor]

    def index_of(self, task_id: int) -> Optional[int]:
        for idx, task in enumerate(self.tasks):
            if task.id == task_id:
                return idx
        return None

    def contains(self, task_id: int) -> bool:
        return self.index_of(task_id) is not None

    def task_by_id(self, task_id: int) -> Optional[Task]:
        index = self.index_of(task_id)
        return self.tasks[index] if index is not None else None

    def tag_by_id(self, tag_id: int) -> Optional[Tag]:
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        return None

    def filter_label(self) -> str:
        if self.selected_tag_id is None:
            return ""
        tag = self.tag_by_id(self.selected_tag_id)
        return tag.name if tag else ""


__all__ = ["FilterParams", "WorkingSet", "fetch_tasks"]
