"""prompt_toolkit application hosting the project and task screens."""

import logging
import os
from typing import Optional, Union

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl

from application.ports import TaskStore
from core import Project
from core.desktop.devtools.application.context import save_last_project
from core.desktop.devtools.interface.tui_controller import TaskListController
from core.desktop.devtools.interface.tui_editing import is_printable
from core.desktop.devtools.interface.tui_events import KeyPress, Resize
from core.desktop.devtools.interface.tui_projects import ProjectListController
from core.desktop.devtools.interface.tui_render import render_project_screen, render_task_screen
from core.desktop.devtools.interface.tui_runner import ThreadedRunner
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("stm.app")

_KEY_ALIASES = {
    "c-m": "enter",
    "c-j": "enter",
    "c-i": "tab",
    "c-h": "backspace",
    "s-tab": "s-tab",
    "escape": "escape",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "pageup": "pageup",
    "pagedown": "pagedown",
    "delete": "delete",
    "c-s": "c-s",
}


def normalize_key(key: Union[Keys, str], data: str = "") -> Optional[str]:
    """Map a prompt_toolkit key to the names the controllers understand.

    Printable characters map to themselves (space is " "); unknown control
    keys map to None and are dropped.
    """
    name = getattr(key, "value", key)
    if name in _KEY_ALIASES:
        return _KEY_ALIASES[name]
    if isinstance(name, str) and is_printable(name):
        return name
    if data and is_printable(data):
        return data
    return None


Controller = Union[ProjectListController, TaskListController]


class StmApp:
    def __init__(self, store: TaskStore, theme: str = DEFAULT_THEME, runner=None):
        self.store = store
        self.runner = runner or ThreadedRunner()
        self.theme = theme
        self.projects = ProjectListController(
            store,
            runner=self.runner,
            on_select=self.open_project,
            on_quit=self.exit,
            on_change=self.force_render,
        )
        self.tasks: Optional[TaskListController] = None
        self.active: Controller = self.projects
        self._size = (0, 0)
        self.app: Optional[Application] = None
        self._build_application()

    # ----------------------------------------------------------------- layout
    def _build_application(self) -> None:
        kb = KeyBindings()

        @kb.add("c-c", eager=True)
        def _(event):
            """Ctrl+C always quits."""
            self.exit()

        @kb.add("escape", eager=True)
        def _(event):
            """Esc without waiting for escape sequences."""
            self.handle_key("escape")

        @kb.add(Keys.BracketedPaste)
        def _(event):
            for ch in event.data.replace("\r\n", "\n").replace("\r", "\n"):
                key = "enter" if ch == "\n" else normalize_key(ch)
                if key:
                    self.handle_key(key)

        @kb.add(Keys.Any)
        def _(event):
            key_press = event.key_sequence[0]
            key = normalize_key(key_press.key, key_press.data)
            if key:
                self.handle_key(key)

        body = Window(content=FormattedTextControl(self.get_screen_text), always_hide_cursor=True, wrap_lines=False)
        self.app = Application(
            layout=Layout(body),
            key_bindings=kb,
            style=build_style(self.theme),
            full_screen=True,
        )
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("STM_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @staticmethod
    def get_terminal_width() -> int:
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def _screen_size(self):
        if self.app is not None:
            try:
                size = self.app.output.get_size()
                return size.columns, size.rows
            except (AttributeError, OSError, ValueError):
                pass
        return self.get_terminal_width(), self.get_terminal_height()

    def get_screen_text(self):
        width, height = self._screen_size()
        if (width, height) != self._size:
            self._size = (width, height)
            self.active.dispatch(Resize(width, height))
        if isinstance(self.active, TaskListController):
            return render_task_screen(self.active, width, height)
        return render_project_screen(self.active, width, height)

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    # -------------------------------------------------------------- routing
    def handle_key(self, key: str) -> None:
        self.active.dispatch(KeyPress(key))

    def open_project(self, project: Project) -> None:
        logger.info("opening project %s", project.id)
        width, height = self._size if self._size != (0, 0) else self._screen_size()
        self.tasks = TaskListController(
            self.store,
            project,
            runner=self.runner,
            on_back=self.show_projects,
            on_quit=self.exit,
            on_change=self.force_render,
            width=width,
            height=height,
        )
        self.active = self.tasks
        store = self.store
        self.runner.submit("save_last_project", lambda: save_last_project(store, project.id), self.tasks.dispatch)
        self.tasks.start()
        self.force_render()

    def show_projects(self) -> None:
        self.tasks = None
        self.active = self.projects
        self.projects.dispatch(Resize(*self._size))
        self.projects.request_projects()
        self.force_render()

    def exit(self) -> None:
        if self.app is not None and self.app.is_running:
            self.app.exit()

    def run(self) -> None:
        try:
            self.app.run(pre_run=self.projects.start)
        finally:
            self.runner.shutdown()


def cmd_tui(args, store: TaskStore) -> int:
    app = StmApp(store, theme=getattr(args, "theme", None) or DEFAULT_THEME)
    app.run()
    return 0


__all__ = ["StmApp", "normalize_key", "cmd_tui"]
