"""
Constants and configuration defaults for linecmd.
"""
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "linecmd"
APP_VERSION: Final[str] = "0.8.0"
APP_DESCRIPTION: Final[str] = "A framework for writing line-oriented command interpreters"

CONFIG_DIR: Final[Path] = Path.home() / ".linecmd"
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"

ENV_HIDE_UNDOCUMENTED: Final[str] = "LINECMD_HIDE_UNDOCUMENTED"
ENV_NO_LINE_EDITOR: Final[str] = "LINECMD_NO_LINE_EDITOR"
ENV_HISTORY_FILE: Final[str] = "LINECMD_HISTORY_FILE"
ENV_LOG_LEVEL: Final[str] = "LINECMD_LOG_LEVEL"

DEFAULT_SHELL: Final[str] = "/bin/sh"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

SUBCOMMAND_SEPARATOR: Final[str] = "_"
HANDLER_PREFIX: Final[str] = "do_"

HELP_SHORTCUT: Final[str] = "?"
SHELL_SHORTCUT: Final[str] = "!"

UNDOCUMENTED_HEADER: Final[str] = "Undocumented commands"
UNDOCUMENTED_RULE: Final[str] = "====================="
UNDOCUMENTED_SEPARATOR: Final[str] = " " * 4

TRUTHY_VALUES: Final[tuple] = ("1", "true", "yes", "on")
