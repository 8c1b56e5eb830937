"""Interface-level constants for the stm TUI and CLI."""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

SEARCH_CHAR_LIMIT = 100
COMMENT_CHAR_LIMIT = 2000
PROJECT_NAME_CHAR_LIMIT = 100
PROJECT_DESCRIPTION_CHAR_LIMIT = 100

STATUS_TTL = 3.0

LANG_PACK = {
    "en": {
        "BACK_BUTTON": "< Projects",
        "SEARCH_LABEL": "Search: ",
        "SEARCH_PLACEHOLDER": "type / to search",
        "FILTER_LABEL": "Tag: ",
        "FILTER_NONE": "None",
        "COMPLETED_MARKER": "[completed]",
        "LOADING": "Loading...",
        "NO_TASKS": "No tasks. Press n to create one.",
        "NO_TASKS_COMPLETED": "No completed tasks.",
        "PRIORITY_SHORT": "P{priority}",
        "EDIT_TITLE_NEW": "New task",
        "EDIT_TITLE_EXISTING": "Edit task",
        "FIELD_TITLE": "Title",
        "FIELD_DESCRIPTION": "Description",
        "FIELD_NOTES": "Notes",
        "FIELD_PRIORITY": "Priority (0-10)",
        "FIELD_TAGS": "Tags",
        "BUTTON_SAVE": "[ Save ]",
        "DETAIL_PRIORITY": "Priority: {priority}",
        "DETAIL_CREATED": "Created: {created}",
        "DETAIL_UPDATED": "Updated: {updated}",
        "DETAIL_COMMENTS": "Comments",
        "DETAIL_NO_COMMENTS": "No comments yet.",
        "COMMENT_PLACEHOLDER": "press c to comment",
        "ASSIGN_TAGS_TITLE": "Assign tags",
        "DROPDOWN_TITLE": "Filter by tag",
        "NO_TAGS": "No tags.",
        "CONFIRM_DELETE": "Delete \"{name}\"?",
        "CONFIRM_DELETE_HINT": "y: delete  n/esc: cancel",
        "HELP_TITLE": "Keys",
        "HELP_CLOSE": "press any key to close",
        "HELP_TASKS": (
            "up/down  move\n"
            "enter    open / select\n"
            "tab      cycle focus\n"
            "n        new task\n"
            "e        edit task\n"
            "d        delete task\n"
            "t        assign tags\n"
            "/        search\n"
            "f        filter by tag\n"
            "c        show completed\n"
            "r        reload\n"
            "esc      back to projects\n"
            "q        quit"
        ),
        "HELP_PROJECTS": (
            "up/down  move\n"
            "enter    open project\n"
            "n        new project\n"
            "d        delete project\n"
            "q        quit"
        ),
        "FOOTER_NORMAL": "n new  e edit  d delete  t tags  / search  f filter  c completed  ? help  q quit",
        "FOOTER_SEARCH": "enter apply  esc done",
        "FOOTER_EDIT": "tab next  shift-tab prev  ctrl-s save  esc cancel",
        "FOOTER_DETAIL": "e edit  d delete  t tags  c comment  esc back  q quit",
        "FOOTER_COMMENT": "ctrl-s submit  esc cancel",
        "FOOTER_ASSIGN": "enter/space toggle  esc close",
        "FOOTER_DROPDOWN": "enter apply  esc close",
        "FOOTER_PROJECTS": "enter open  n new  d delete  ? help  q quit",
        "FOOTER_PROJECT_FORM": "tab next  enter advance  ctrl-s create  esc cancel",
        "STATUS_SAVED": "Task saved",
        "STATUS_DELETED": "Task deleted",
        "STATUS_COMMENT_ADDED": "Comment added",
        "STATUS_DATA_FAILED": "{operation} failed: {error}",
        "PROJECTS_TITLE": "Projects",
        "NO_PROJECTS": "No projects. Press n to create one.",
        "PROJECT_FORM_TITLE": "New project",
        "FIELD_NAME": "Name",
        "FIELD_PROJECT_DESCRIPTION": "Description",
        "BUTTON_CREATE": "[ Create ]",
        "STATUS_PROJECT_CREATED": "Project created",
        "STATUS_PROJECT_DELETED": "Project deleted",
        "CLI_DESCRIPTION": "stm: keyboard-driven local task manager",
        "CLI_NO_PROJECTS": "No projects.",
        "ERR_STORE_OPEN": "Cannot open database {path}: {error}",
        "ERR_UNKNOWN_LANG": "Unknown language: {language}",
    },
    "ru": {
        "BACK_BUTTON": "< Проекты",
        "SEARCH_LABEL": "Поиск: ",
        "SEARCH_PLACEHOLDER": "нажмите / для поиска",
        "FILTER_LABEL": "Тег: ",
        "FILTER_NONE": "Нет",
        "COMPLETED_MARKER": "[завершённые]",
        "LOADING": "Загрузка...",
        "NO_TASKS": "Задач нет. Нажмите n, чтобы создать.",
        "NO_TASKS_COMPLETED": "Завершённых задач нет.",
        "EDIT_TITLE_NEW": "Новая задача",
        "EDIT_TITLE_EXISTING": "Редактирование задачи",
        "FIELD_TITLE": "Название",
        "FIELD_DESCRIPTION": "Описание",
        "FIELD_NOTES": "Заметки",
        "FIELD_PRIORITY": "Приоритет (0-10)",
        "FIELD_TAGS": "Теги",
        "BUTTON_SAVE": "[ Сохранить ]",
        "DETAIL_PRIORITY": "Приоритет: {priority}",
        "DETAIL_CREATED": "Создана: {created}",
        "DETAIL_UPDATED": "Обновлена: {updated}",
        "DETAIL_COMMENTS": "Комментарии",
        "DETAIL_NO_COMMENTS": "Комментариев пока нет.",
        "COMMENT_PLACEHOLDER": "нажмите c, чтобы прокомментировать",
        "ASSIGN_TAGS_TITLE": "Назначить теги",
        "DROPDOWN_TITLE": "Фильтр по тегу",
        "NO_TAGS": "Тегов нет.",
        "CONFIRM_DELETE": "Удалить \"{name}\"?",
        "CONFIRM_DELETE_HINT": "y: удалить  n/esc: отмена",
        "HELP_TITLE": "Клавиши",
        "HELP_CLOSE": "любая клавиша закрывает",
        "STATUS_SAVED": "Задача сохранена",
        "STATUS_DELETED": "Задача удалена",
        "STATUS_COMMENT_ADDED": "Комментарий добавлен",
        "STATUS_DATA_FAILED": "{operation}: ошибка: {error}",
        "PROJECTS_TITLE": "Проекты",
        "NO_PROJECTS": "Проектов нет. Нажмите n, чтобы создать.",
        "PROJECT_FORM_TITLE": "Новый проект",
        "FIELD_NAME": "Название",
        "FIELD_PROJECT_DESCRIPTION": "Описание",
        "BUTTON_CREATE": "[ Создать ]",
        "STATUS_PROJECT_CREATED": "Проект создан",
        "STATUS_PROJECT_DELETED": "Проект удалён",
        "CLI_NO_PROJECTS": "Проектов нет.",
        "ERR_STORE_OPEN": "Не удалось открыть базу {path}: {error}",
        "ERR_UNKNOWN_LANG": "Неизвестный язык: {language}",
        "PRIORITY_SHORT": "P{priority}",
        "CLI_DESCRIPTION": "stm: клавиатурный менеджер задач",
        "HELP_TASKS": (
            "вверх/вниз  перемещение\n"
            "enter       открыть / выбрать\n"
            "tab         сменить фокус\n"
            "n           новая задача\n"
            "e           редактировать\n"
            "d           удалить\n"
            "t           назначить теги\n"
            "/           поиск\n"
            "f           фильтр по тегу\n"
            "c           завершённые\n"
            "r           обновить\n"
            "esc         к проектам\n"
            "q           выход"
        ),
        "HELP_PROJECTS": (
            "вверх/вниз  перемещение\n"
            "enter       открыть проект\n"
            "n           новый проект\n"
            "d           удалить проект\n"
            "q           выход"
        ),
        "FOOTER_NORMAL": "n новая  e изм.  d удалить  t теги  / поиск  f фильтр  c завершённые  ? помощь  q выход",
        "FOOTER_SEARCH": "enter применить  esc готово",
        "FOOTER_EDIT": "tab далее  shift-tab назад  ctrl-s сохранить  esc отмена",
        "FOOTER_DETAIL": "e изм.  d удалить  t теги  c комментарий  esc назад  q выход",
        "FOOTER_COMMENT": "ctrl-s отправить  esc отмена",
        "FOOTER_ASSIGN": "enter/пробел переключить  esc закрыть",
        "FOOTER_DROPDOWN": "enter применить  esc закрыть",
        "FOOTER_PROJECTS": "enter открыть  n новый  d удалить  ? помощь  q выход",
        "FOOTER_PROJECT_FORM": "tab далее  enter дальше  ctrl-s создать  esc отмена",
    },
}
