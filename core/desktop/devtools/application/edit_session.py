"""Edit drafts: uncommitted copies of a task's editable fields and tags."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from application.ports import TaskStore
from core import Task, clamp_priority


class EditField(Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    NOTES = "notes"
    PRIORITY = "priority"
    TAGS = "tags"
    SAVE = "save"


@dataclass(frozen=True)
class FieldSpec:
    """How one edit field behaves.

    `attr` names the draft attribute backing a text field (None for the tag
    selector and the save button); `normalize` turns raw input into the value
    that gets persisted.
    """

    attr: Optional[str] = None
    multiline: bool = False
    enter_advances: bool = False
    char_limit: int = 0
    normalize: Callable[[str], object] = str.strip


FIELD_ORDER: Tuple[EditField, ...] = tuple(EditField)

FIELD_SPECS: Dict[EditField, FieldSpec] = {
    EditField.TITLE: FieldSpec(attr="title", enter_advances=True, char_limit=200),
    EditField.DESCRIPTION: FieldSpec(attr="description", multiline=True, char_limit=1000),
    EditField.NOTES: FieldSpec(attr="notes", multiline=True, char_limit=5000),
    EditField.PRIORITY: FieldSpec(attr="priority_text", enter_advances=True, char_limit=2, normalize=clamp_priority),
    EditField.TAGS: FieldSpec(),
    EditField.SAVE: FieldSpec(),
}

TEXT_FIELDS: Tuple[EditField, ...] = tuple(f for f in FIELD_ORDER if FIELD_SPECS[f].attr)


def cycle_field(current: EditField, delta: int) -> EditField:
    idx = FIELD_ORDER.index(current)
    return FIELD_ORDER[(idx + delta) % len(FIELD_ORDER)]


@dataclass(frozen=True)
class DraftValues:
    title: str
    description: str
    notes: str
    priority: int


@dataclass
class EditDraft:
    task_id: Optional[int] = None
    title: str = ""
    description: str = ""
    notes: str = ""
    priority_text: str = "0"
    # Selection order matters: on save, later grouped tags win over earlier ones.
    tag_ids: List[int] = field(default_factory=list)

    @classmethod
    def new(cls) -> "EditDraft":
        return cls()

    @classmethod
    def from_task(cls, task: Task) -> "EditDraft":
        return cls(
            task_id=task.id,
            title=task.title,
            description=task.description,
            notes=task.notes,
            priority_text=str(task.priority),
            tag_ids=[tag.id for tag in task.tags],
        )

    @property
    def is_new(self) -> bool:
        return self.task_id is None

    def has_tag(self, tag_id: int) -> bool:
        return tag_id in self.tag_ids

    def toggle_tag(self, tag_id: int) -> bool:
        """Flip membership of `tag_id`; returns True when it is now selected."""
        if tag_id in self.tag_ids:
            self.tag_ids.remove(tag_id)
            return False
        self.tag_ids.append(tag_id)
        return True

    def set_text(self, edit_field: EditField, value: str) -> None:
        attr = FIELD_SPECS[edit_field].attr
        if attr:
            setattr(self, attr, value)

    def get_text(self, edit_field: EditField) -> str:
        attr = FIELD_SPECS[edit_field].attr
        return str(getattr(self, attr)) if attr else ""

    def values(self) -> Optional[DraftValues]:
        """Normalized values to persist, or None when the title is blank."""
        normalized = {
            FIELD_SPECS[f].attr: FIELD_SPECS[f].normalize(self.get_text(f))
            for f in TEXT_FIELDS
        }
        if not normalized["title"]:
            return None
        return DraftValues(
            title=normalized["title"],
            description=normalized["description"],
            notes=normalized["notes"],
            priority=normalized["priority_text"],
        )


def plan_tag_changes(persisted: Iterable[int], desired: Iterable[int]) -> Tuple[List[int], List[int]]:
    """Minimal (remove, add) lists converging `persisted` onto `desired`."""
    current = list(dict.fromkeys(persisted))
    wanted = list(dict.fromkeys(desired))
    to_remove = [tag_id for tag_id in current if tag_id not in wanted]
    to_add = [tag_id for tag_id in wanted if tag_id not in current]
    return to_remove, to_add


def save_draft(store: TaskStore, project_id: int, draft: EditDraft, values: DraftValues) -> int:
    """Persist a draft and converge its tags in one store write; returns the task id.

    New tasks receive every selected tag. Existing tasks get only the diff
    between their persisted tag set and the draft.
    """
    if draft.is_new:
        task_id = None
        to_remove, to_add = [], list(dict.fromkeys(draft.tag_ids))
    else:
        task_id = int(draft.task_id)
        persisted = [tag.id for tag in store.get_task_tags(task_id)]
        to_remove, to_add = plan_tag_changes(persisted, draft.tag_ids)
    return store.save_task_with_tags(
        project_id,
        task_id,
        values.title,
        values.description,
        values.notes,
        values.priority,
        remove_tag_ids=to_remove,
        add_tag_ids=to_add,
    )


__all__ = [
    "EditField",
    "FieldSpec",
    "FIELD_ORDER",
    "FIELD_SPECS",
    "TEXT_FIELDS",
    "cycle_field",
    "DraftValues",
    "EditDraft",
    "plan_tag_changes",
    "save_draft",
]
