"""Task screen controller: the view-state machine over one project's tasks.

All input arrives through `dispatch` (key presses, resizes and the results of
deferred store work). Store calls never run inside a handler; they are
submitted to the runner and come back as events.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Optional

from prompt_toolkit.buffer import Buffer

from application.ports import TaskStore
from core import Project, Task
from core.desktop.devtools.application.edit_session import EditDraft
from core.desktop.devtools.application.working_set import WorkingSet, fetch_tasks
from core.desktop.devtools.interface.constants import SEARCH_CHAR_LIMIT
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_actions import (
    handle_confirm_delete_key,
    open_delete_confirm,
    save_session,
    submit_comment,
    toggle_assigned_tag,
)
from core.desktop.devtools.interface.tui_comments import CommentComposer
from core.desktop.devtools.interface.tui_editing import EditOutcome, EditSession, apply_text_key
from core.desktop.devtools.interface.tui_events import (
    CommentCreated,
    CommentsLoaded,
    DataFailed,
    EventDispatcher,
    KeyPress,
    Resize,
    TagsLoaded,
    TagToggled,
    TaskDeleted,
    TaskSaved,
    TasksLoaded,
)
from core.desktop.devtools.interface.tui_modes import (
    AssigningTagsMode,
    ConfirmDeleteMode,
    DetailMode,
    EditingMode,
    Focus,
    HelpMode,
    Mode,
    NormalMode,
    TagDropdownMode,
    cycle_focus,
)
from core.desktop.devtools.interface.tui_navigation import move_vertical_selection, page_size
from core.desktop.devtools.interface.tui_runner import InlineRunner
from core.desktop.devtools.interface.tui_scroll import Viewport
from core.desktop.devtools.interface.tui_state import (
    apply_comments_loaded,
    apply_tags_loaded,
    apply_tasks_loaded,
)


class TaskListController(EventDispatcher):
    logger = logging.getLogger("stm.tasks")

    def __init__(
        self,
        store: TaskStore,
        project: Project,
        runner=None,
        on_back: Optional[Callable[[], None]] = None,
        on_quit: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
        width: int = 80,
        height: int = 24,
    ):
        super().__init__(runner or InlineRunner(), on_change)
        self.store = store
        self.project = project
        self.on_back = on_back
        self.on_quit = on_quit
        self.working_set = WorkingSet(project.id)
        self.viewport = Viewport(height=height)
        self.width = width
        self.mode: Mode = NormalMode()
        self.search_buffer = Buffer()
        self.comments = CommentComposer()
        self._normal_keys: Dict[str, Callable[[], None]] = {
            "q": self.quit,
            "escape": self.go_back,
            "tab": lambda: self._cycle_focus(1),
            "s-tab": lambda: self._cycle_focus(-1),
            "enter": self._activate_focus,
            "n": self.new_task,
            "/": lambda: self._set_focus(Focus.SEARCH_INPUT),
            "f": self.open_tag_dropdown,
            "c": self.toggle_show_completed,
            "r": self.refresh,
            "?": self.show_help,
        }
        # Keys acting on the current task only work with the list focused.
        self._list_keys: Dict[str, Callable[[], None]] = {
            "e": self.edit_current,
            "d": self.confirm_delete_current,
            "t": self.assign_tags_current,
            "up": lambda: move_vertical_selection(self, -1),
            "down": lambda: move_vertical_selection(self, 1),
            "pageup": lambda: move_vertical_selection(self, -page_size(self)),
            "pagedown": lambda: move_vertical_selection(self, page_size(self)),
        }
        self._result_handlers = {
            TasksLoaded: apply_tasks_loaded,
            TagsLoaded: apply_tags_loaded,
            CommentsLoaded: apply_comments_loaded,
            TaskSaved: TaskListController._on_task_saved,
            TaskDeleted: TaskListController._on_task_deleted,
            TagToggled: TaskListController._on_tag_toggled,
            CommentCreated: TaskListController._on_comment_created,
            DataFailed: TaskListController._on_data_failed,
        }

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, **kwargs)

    # ---------------------------------------------------------------- requests
    def start(self) -> None:
        """Load tags and the first page of tasks."""
        self.request_tags()
        self.request_reload()

    def request_reload(self) -> None:
        generation, params = self.working_set.begin_reload()
        store = self.store

        def work() -> TasksLoaded:
            complete_id, tasks = fetch_tasks(store, params)
            return TasksLoaded(generation, complete_id, tasks)

        self.defer("list_tasks", work)

    def request_tags(self) -> None:
        store = self.store
        self.defer("list_tags", lambda: TagsLoaded(store.list_tags()))

    def request_comments(self, task_id: int) -> None:
        store = self.store
        self.defer("get_task_comments", lambda: CommentsLoaded(task_id, tuple(store.get_task_comments(task_id))))

    def refresh(self) -> None:
        self.request_tags()
        self.request_reload()

    # ------------------------------------------------------------------ events
    def handle_event(self, event) -> None:
        if isinstance(event, KeyPress):
            self.handle_key(event.key)
        elif isinstance(event, Resize):
            self.width = event.width
            self.viewport.resize(event.height)
            self.viewport.ensure_visible(self.working_set.cursor, len(self.working_set))
        else:
            handler = self._result_handlers.get(type(event))
            if handler is None:
                self.logger.debug("ignoring event %r", event)
                return
            handler(self, event)

    def _on_task_saved(self, event: TaskSaved) -> None:
        self.working_set.pending_select_id = event.task_id
        self.set_status_message(self._t("STATUS_SAVED"))
        self.request_reload()

    def _on_task_deleted(self, event: TaskDeleted) -> None:
        self.set_status_message(self._t("STATUS_DELETED"))
        self.request_reload()

    def _on_tag_toggled(self, event: TagToggled) -> None:
        self.request_reload()

    def _on_comment_created(self, event: CommentCreated) -> None:
        mode = self.mode
        if not isinstance(mode, DetailMode) or mode.task_id != event.task_id:
            return
        self.comments.clear()
        self.mode = replace(mode, comment_focused=False)
        self.set_status_message(self._t("STATUS_COMMENT_ADDED"))
        self.request_comments(event.task_id)

    def _on_data_failed(self, event: DataFailed) -> None:
        self.report_failure(event, self._t("STATUS_DATA_FAILED", operation=event.operation, error=event.error))

    # ---------------------------------------------------------------- key routing
    def handle_key(self, key: str) -> None:
        mode = self.mode
        if isinstance(mode, HelpMode):
            # Any key closes help and is consumed.
            self.mode = mode.prior
        elif isinstance(mode, ConfirmDeleteMode):
            handle_confirm_delete_key(self, mode, key)
        elif isinstance(mode, EditingMode):
            self._handle_editing_key(mode.session, key)
        elif isinstance(mode, DetailMode):
            self._handle_detail_key(mode, key)
        elif isinstance(mode, AssigningTagsMode):
            self._handle_assign_key(mode, key)
        elif isinstance(mode, TagDropdownMode):
            self._handle_dropdown_key(mode, key)
        else:
            self._handle_normal_key(mode, key)

    def _handle_normal_key(self, mode: NormalMode, key: str) -> None:
        if mode.focus is Focus.SEARCH_INPUT:
            self._handle_search_key(key)
            return
        action = self._normal_keys.get(key)
        if action is None and mode.focus is Focus.TASK_LIST:
            action = self._list_keys.get(key)
        if action is not None:
            action()

    def _handle_search_key(self, key: str) -> None:
        if key == "escape":
            self._set_focus(Focus.TASK_LIST)
            return
        if key == "enter":
            self._set_focus(Focus.TASK_LIST)
            self.request_reload()
            return
        before = self.search_buffer.text
        apply_text_key(self.search_buffer, key, SEARCH_CHAR_LIMIT)
        if self.search_buffer.text == before:
            return
        self.working_set.set_search(self.search_buffer.text)
        self.working_set.cursor = 0
        self.viewport.reset()
        self.request_reload()

    def _handle_editing_key(self, session: EditSession, key: str) -> None:
        outcome = session.handle_key(key, self.working_set.tags)
        if outcome is EditOutcome.CANCEL:
            self.mode = NormalMode()
        elif outcome is EditOutcome.SAVE:
            save_session(self, session)

    def _handle_detail_key(self, mode: DetailMode, key: str) -> None:
        if mode.comment_focused:
            if key == "escape":
                self.mode = replace(mode, comment_focused=False)
            elif key == "c-s":
                submit_comment(self, mode)
            else:
                self.comments.handle_key(key)
            return
        task = self.working_set.task_by_id(mode.task_id)
        if key == "escape" or task is None:
            self.comments.clear()
            self.mode = NormalMode()
        elif key == "e":
            self.start_editing(task)
        elif key == "d":
            open_delete_confirm(self, task, return_to=mode)
        elif key == "t":
            self.mode = AssigningTagsMode(task.id)
        elif key in ("c", "a"):
            self.mode = replace(mode, comment_focused=True)
        elif key == "q":
            self.quit()

    def _handle_assign_key(self, mode: AssigningTagsMode, key: str) -> None:
        if key == "escape":
            self.mode = NormalMode()
        elif key == "up":
            move_vertical_selection(self, -1)
        elif key == "down":
            move_vertical_selection(self, 1)
        elif key in ("enter", " "):
            toggle_assigned_tag(self, mode)

    def _handle_dropdown_key(self, mode: TagDropdownMode, key: str) -> None:
        if key == "escape":
            self.mode = NormalMode()
        elif key == "up":
            move_vertical_selection(self, -1)
        elif key == "down":
            move_vertical_selection(self, 1)
        elif key == "enter":
            tags = self.working_set.tags
            tag_id = tags[mode.cursor - 1].id if 0 < mode.cursor <= len(tags) else None
            self.working_set.set_tag_filter(tag_id)
            self.working_set.cursor = 0
            self.viewport.reset()
            self.mode = NormalMode()
            self.request_reload()

    # ----------------------------------------------------------------- actions
    def quit(self) -> None:
        if self.on_quit:
            self.on_quit()

    def go_back(self) -> None:
        if self.on_back:
            self.on_back()

    def _set_focus(self, focus: Focus) -> None:
        self.mode = NormalMode(focus=focus)

    def _cycle_focus(self, delta: int) -> None:
        mode = self.mode
        current = mode.focus if isinstance(mode, NormalMode) else Focus.TASK_LIST
        self._set_focus(cycle_focus(current, delta))

    def _activate_focus(self) -> None:
        focus = self.mode.focus if isinstance(self.mode, NormalMode) else Focus.TASK_LIST
        if focus is Focus.BACK_BUTTON:
            self.go_back()
        elif focus is Focus.TAG_DROPDOWN:
            self.open_tag_dropdown()
        else:
            self.open_detail()

    def open_detail(self) -> None:
        task = self.working_set.current_task()
        if task is None:
            return
        self.comments.clear()
        self.mode = DetailMode(task.id)
        self.request_comments(task.id)

    def start_editing(self, task: Optional[Task]) -> None:
        draft = EditDraft.from_task(task) if task is not None else EditDraft.new()
        self.mode = EditingMode(EditSession(draft))

    def new_task(self) -> None:
        self.start_editing(None)

    def edit_current(self) -> None:
        task = self.working_set.current_task()
        if task is not None:
            self.start_editing(task)

    def confirm_delete_current(self) -> None:
        task = self.working_set.current_task()
        if task is not None:
            open_delete_confirm(self, task, return_to=self.mode)

    def assign_tags_current(self) -> None:
        task = self.working_set.current_task()
        if task is not None:
            self.mode = AssigningTagsMode(task.id)

    def open_tag_dropdown(self) -> None:
        ws = self.working_set
        cursor = 0
        if ws.selected_tag_id is not None:
            for idx, tag in enumerate(ws.tags, start=1):
                if tag.id == ws.selected_tag_id:
                    cursor = idx
                    break
        self.mode = TagDropdownMode(cursor=cursor)

    def toggle_show_completed(self) -> None:
        self.working_set.toggle_show_completed()
        self.viewport.reset()
        self.request_reload()

    def show_help(self) -> None:
        self.mode = HelpMode(prior=self.mode)


__all__ = ["TaskListController"]
