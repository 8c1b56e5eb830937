#!/usr/bin/env python3
"""Run the stm CLI from a source checkout: ``python stm.py [command]``."""

import sys

from core.desktop.devtools.interface.stm_app import build_parser, cmd_config, cmd_projects, cmd_tui, main

__all__ = ["main", "build_parser", "cmd_tui", "cmd_projects", "cmd_config"]

if __name__ == "__main__":
    sys.exit(main())
