from typing import Optional

from application.ports import TaskStore

LAST_PROJECT_KEY = "last_project_id"


def save_last_project(store: TaskStore, project_id: Optional[int]) -> None:
    store.set_setting(LAST_PROJECT_KEY, "" if project_id is None else str(project_id))


def get_last_project(store: TaskStore) -> Optional[int]:
    """Id of the last opened project, or None when unset or unparsable."""
    raw = (store.get_setting(LAST_PROJECT_KEY) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


__all__ = ["LAST_PROJECT_KEY", "save_last_project", "get_last_project"]
