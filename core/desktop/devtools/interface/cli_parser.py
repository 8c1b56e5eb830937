"""CLI parser construction for the stm CLI/TUI."""

import argparse
from typing import Any, Mapping

from core.desktop.devtools.interface.i18n import translate


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stm",
        description=translate("CLI_DESCRIPTION"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="show version and exit")
    parser.add_argument("--db", dest="db_path", help="database file (default: STM_DB_PATH, config db_path, XDG data dir)")

    sub = parser.add_subparsers(dest="command", help="commands")

    tui_p = sub.add_parser("tui", help="start the terminal UI (default)")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"color theme (default: {default_theme})")
    tui_p.set_defaults(func=commands.cmd_tui)

    projects_p = sub.add_parser("projects", help="list projects")
    projects_p.set_defaults(func=commands.cmd_projects)

    config_p = sub.add_parser("config", help="show or change user settings (empty value removes a key)")
    config_p.add_argument("--theme", choices=list(themes.keys()) + [""], default=None)
    config_p.add_argument("--lang", default=None, help="interface language (en, ru)")
    config_p.add_argument("--db-path", dest="config_db_path", default=None, help="default database file")
    config_p.set_defaults(func=commands.cmd_config)

    return parser


__all__ = ["build_parser"]
