"""Project picker screen: list, create and delete projects."""

import logging
from enum import Enum
from typing import Callable, List, Optional

from prompt_toolkit.buffer import Buffer

from application.ports import TaskStore
from core import Project
from core.desktop.devtools.application.context import get_last_project
from core.desktop.devtools.interface.constants import (
    PROJECT_DESCRIPTION_CHAR_LIMIT,
    PROJECT_NAME_CHAR_LIMIT,
)
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_editing import apply_text_key, set_buffer_text
from core.desktop.devtools.interface.tui_events import (
    DataFailed,
    EventDispatcher,
    KeyPress,
    ProjectCreated,
    ProjectDeleted,
    ProjectsLoaded,
    Resize,
)
from core.desktop.devtools.interface.tui_runner import InlineRunner


class ProjectView(Enum):
    LIST = "list"
    FORM = "form"
    CONFIRM_DELETE = "confirm"
    HELP = "help"


# Form fields in tab order.
FORM_NAME, FORM_DESCRIPTION, FORM_CREATE = range(3)
FORM_FIELD_COUNT = 3


class ProjectListController(EventDispatcher):
    logger = logging.getLogger("stm.projects")

    def __init__(
        self,
        store: TaskStore,
        runner=None,
        on_select: Optional[Callable[[Project], None]] = None,
        on_quit: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        super().__init__(runner or InlineRunner(), on_change)
        self.store = store
        self.on_select = on_select
        self.on_quit = on_quit
        self.projects: List[Project] = []
        self.loaded = False
        self.cursor = 0
        self.view = ProjectView.LIST
        self.form_field = FORM_NAME
        self.name_buffer = Buffer()
        self.description_buffer = Buffer()
        self.delete_target: Optional[Project] = None
        self.width = 80
        self.height = 24

    # ---------------------------------------------------------------- requests
    def start(self, reopen_last: bool = True) -> None:
        """Load projects; when `reopen_last` is set, jump into the last opened one."""
        self.request_projects(reopen_last=reopen_last)

    def request_projects(self, reopen_last: bool = False) -> None:
        store = self.store

        def work() -> ProjectsLoaded:
            projects = store.list_projects()
            last_id = get_last_project(store) if reopen_last else None
            return ProjectsLoaded(projects, last_id)

        self.defer("list_projects", work)

    def selected_project(self) -> Optional[Project]:
        if not self.projects or not (0 <= self.cursor < len(self.projects)):
            return None
        return self.projects[self.cursor]

    # ------------------------------------------------------------------ events
    def handle_event(self, event) -> None:
        if isinstance(event, KeyPress):
            self.handle_key(event.key)
        elif isinstance(event, Resize):
            self.width, self.height = event.width, event.height
        elif isinstance(event, ProjectsLoaded):
            self._apply_projects(event)
        elif isinstance(event, ProjectCreated):
            self.set_status_message(translate("STATUS_PROJECT_CREATED"))
            self.request_projects()
            self._select(event.project)
        elif isinstance(event, ProjectDeleted):
            self.set_status_message(translate("STATUS_PROJECT_DELETED"))
            self.request_projects()
        elif isinstance(event, DataFailed):
            self.report_failure(event, translate("STATUS_DATA_FAILED", operation=event.operation, error=event.error))

    def _apply_projects(self, event: ProjectsLoaded) -> None:
        self.projects = list(event.projects)
        self.loaded = True
        self.cursor = max(0, min(self.cursor, len(self.projects) - 1))
        if event.last_project_id is None:
            return
        for project in self.projects:
            if project.id == event.last_project_id:
                self._select(project)
                return

    def _select(self, project: Project) -> None:
        if self.on_select:
            self.on_select(project)

    # ---------------------------------------------------------------- key routing
    def handle_key(self, key: str) -> None:
        if self.view is ProjectView.HELP:
            self.view = ProjectView.LIST
        elif self.view is ProjectView.CONFIRM_DELETE:
            self._handle_confirm_key(key)
        elif self.view is ProjectView.FORM:
            self._handle_form_key(key)
        else:
            self._handle_list_key(key)

    def _handle_list_key(self, key: str) -> None:
        if key == "q":
            if self.on_quit:
                self.on_quit()
        elif key == "up":
            self.cursor = max(0, self.cursor - 1)
        elif key == "down":
            self.cursor = max(0, min(self.cursor + 1, len(self.projects) - 1))
        elif key == "enter":
            project = self.selected_project()
            if project is not None:
                self._select(project)
        elif key == "n":
            self.open_form()
        elif key == "d":
            project = self.selected_project()
            if project is not None:
                self.delete_target = project
                self.view = ProjectView.CONFIRM_DELETE
        elif key == "?":
            self.view = ProjectView.HELP

    def _handle_confirm_key(self, key: str) -> None:
        if key in ("y", "Y"):
            target = self.delete_target
            self.delete_target = None
            self.view = ProjectView.LIST
            if target is not None:
                self._delete(target.id)
        elif key in ("n", "N", "escape"):
            self.delete_target = None
            self.view = ProjectView.LIST

    def open_form(self) -> None:
        set_buffer_text(self.name_buffer, "")
        set_buffer_text(self.description_buffer, "")
        self.form_field = FORM_NAME
        self.view = ProjectView.FORM

    def _handle_form_key(self, key: str) -> None:
        if key == "escape":
            self.view = ProjectView.LIST
        elif key == "tab":
            self.form_field = (self.form_field + 1) % FORM_FIELD_COUNT
        elif key == "s-tab":
            self.form_field = (self.form_field - 1) % FORM_FIELD_COUNT
        elif key == "c-s" or (key == "enter" and self.form_field == FORM_CREATE):
            self._submit_form()
        elif key == "enter":
            self.form_field += 1
        elif self.form_field == FORM_NAME:
            apply_text_key(self.name_buffer, key, PROJECT_NAME_CHAR_LIMIT)
        elif self.form_field == FORM_DESCRIPTION:
            apply_text_key(self.description_buffer, key, PROJECT_DESCRIPTION_CHAR_LIMIT)

    def _submit_form(self) -> None:
        title = self.name_buffer.text.strip()
        if not title:
            return
        description = self.description_buffer.text.strip()
        self.view = ProjectView.LIST
        store = self.store
        self.defer("create_project", lambda: ProjectCreated(store.create_project(title, description)))

    def _delete(self, project_id: int) -> None:
        store = self.store

        def work() -> ProjectDeleted:
            store.delete_project(project_id)
            return ProjectDeleted(project_id)

        self.defer("delete_project", work)


__all__ = ["ProjectListController", "ProjectView", "FORM_NAME", "FORM_DESCRIPTION", "FORM_CREATE"]
