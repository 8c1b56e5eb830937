#!/usr/bin/env python3
"""
stm: keyboard-driven local task manager.

Projects, tasks, tags and comments live in one SQLite file. This module is the
CLI facade: it resolves the database, configures logging and starts the TUI.
"""

import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

from config import get_user_theme, set_user_db_path, set_user_lang, set_user_theme
from core import DataError
from core.desktop.devtools.interface.cli_parser import build_parser as build_cli_parser
from core.desktop.devtools.interface.constants import LANG_PACK
from core.desktop.devtools.interface.i18n import effective_lang, translate
from core.desktop.devtools.interface.tui_app import cmd_tui as _run_tui
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.db_path_resolver import get_db_path
from infrastructure.sqlite_repository import SqliteTaskStore

logger = logging.getLogger("stm.app")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Log to STM_LOG_FILE when set; otherwise stay silent (stderr belongs to the TUI)."""
    path = os.getenv("STM_LOG_FILE")
    root = logging.getLogger("stm")
    if not path:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(os.path.expanduser(path), encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    level = os.getenv("STM_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level, logging.INFO))


def open_store(args) -> Optional[SqliteTaskStore]:
    db_path = getattr(args, "db_path", None)
    try:
        return SqliteTaskStore(db_path)
    except DataError as exc:
        target = db_path or get_db_path()
        logger.error("cannot open store at %s: %s", target, exc.message)
        print(translate("ERR_STORE_OPEN", path=target, error=exc.message), file=sys.stderr)
        return None


def cmd_tui(args) -> int:
    if not getattr(args, "theme", None):
        configured = get_user_theme()
        args.theme = configured if configured in THEMES else DEFAULT_THEME
    store = open_store(args)
    if store is None:
        return 1
    try:
        return _run_tui(args, store)
    finally:
        store.close()


def cmd_projects(args) -> int:
    store = open_store(args)
    if store is None:
        return 1
    try:
        projects = store.list_projects()
    except DataError as exc:
        print(translate("STATUS_DATA_FAILED", operation=exc.operation, error=exc.message), file=sys.stderr)
        return 1
    finally:
        store.close()
    if not projects:
        print(translate("CLI_NO_PROJECTS"))
        return 0
    for project in projects:
        line = f"{project.id:>4}  {project.title}"
        if project.description:
            line += f"  - {project.description}"
        print(line)
    return 0


def cmd_config(args) -> int:
    lang = args.lang
    if lang and lang not in LANG_PACK:
        print(translate("ERR_UNKNOWN_LANG", language=lang), file=sys.stderr)
        return 1
    if args.theme is not None:
        set_user_theme(args.theme)
    if lang is not None:
        set_user_lang(lang)
    if args.config_db_path is not None:
        set_user_db_path(args.config_db_path)
    print(f"theme: {get_user_theme() or DEFAULT_THEME}")
    print(f"lang: {effective_lang()}")
    print(f"db_path: {get_db_path(getattr(args, 'db_path', None))}")
    return 0


def build_parser():
    """Build CLI argument parser."""
    return build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("stm"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    configure_logging()
    if not getattr(args, "command", None):
        args.theme = None
        return cmd_tui(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
