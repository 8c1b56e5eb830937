from typing import List, Optional, Protocol, Sequence

from core import Comment, Project, Tag, TagGroup, Task


class TaskStore(Protocol):
    """Synchronous data-access API; every call may raise ``core.DataError``."""

    # Projects
    def create_project(self, title: str, description: str = "") -> Project:
        ...

    def get_project(self, project_id: int) -> Project:
        ...

    def list_projects(self) -> List[Project]:
        ...

    def update_project(self, project_id: int, title: str, description: str) -> None:
        ...

    def delete_project(self, project_id: int) -> None:
        ...

    def project_count(self) -> int:
        ...

    # Tasks
    def create_task(self, project_id: int, title: str, description: str = "", priority: int = 0, notes: str = "") -> Task:
        ...

    def get_task(self, task_id: int) -> Task:
        ...

    def list_tasks(self, project_id: int) -> List[Task]:
        ...

    def list_tasks_filtered(
        self,
        project_id: int,
        search: str = "",
        tag_id: Optional[int] = None,
        exclude_tag_id: Optional[int] = None,
    ) -> List[Task]:
        ...

    def update_task(self, task_id: int, title: str, description: str, notes: str, priority: int) -> None:
        ...

    def save_task_with_tags(
        self,
        project_id: int,
        task_id: Optional[int],
        title: str,
        description: str,
        notes: str,
        priority: int,
        remove_tag_ids: Sequence[int] = (),
        add_tag_ids: Sequence[int] = (),
    ) -> int:
        ...

    def delete_task(self, task_id: int) -> None:
        ...

    # Tags
    def create_tag_group(self, name: str) -> TagGroup:
        ...

    def get_tag_group(self, group_id: int) -> TagGroup:
        ...

    def list_tag_groups(self) -> List[TagGroup]:
        ...

    def delete_tag_group(self, group_id: int) -> None:
        ...

    def create_tag(self, name: str, color: str = "", group_id: Optional[int] = None) -> Tag:
        ...

    def get_tag(self, tag_id: int) -> Tag:
        ...

    def list_tags(self) -> List[Tag]:
        ...

    def list_tags_by_group(self, group_id: int) -> List[Tag]:
        ...

    def update_tag(self, tag_id: int, name: str, color: str, group_id: Optional[int]) -> None:
        ...

    def delete_tag(self, tag_id: int) -> None:
        ...

    def get_tag_by_name(self, name: str) -> Optional[Tag]:
        ...

    def get_task_tags(self, task_id: int) -> List[Tag]:
        ...

    def add_tag_to_task(self, task_id: int, tag_id: int) -> None:
        ...

    def remove_tag_from_task(self, task_id: int, tag_id: int) -> None:
        ...

    # Comments
    def create_comment(self, task_id: int, content: str) -> Comment:
        ...

    def get_comment(self, comment_id: int) -> Comment:
        ...

    def get_task_comments(self, task_id: int) -> List[Comment]:
        ...

    def delete_comment(self, comment_id: int) -> None:
        ...

    # Settings
    def get_setting(self, key: str) -> str:
        ...

    def set_setting(self, key: str, value: str) -> None:
        ...
