"""
Main entry point for linecmd.
"""
import argparse
import logging
import sys
from typing import List, Optional

from .config import ConfigManager, get_config
from .constants import APP_DESCRIPTION, APP_NAME, APP_VERSION
from .examples import EXAMPLES
from .interpreter import Cmd

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}"
    )

    parser.add_argument(
        "-e", "--example",
        choices=sorted(EXAMPLES),
        help="Run one of the bundled example interpreters"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )

    parser.add_argument(
        "--no-line-editor",
        action="store_true",
        help="Read plain lines from stdin without editing or completion"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides the config file)"
    )

    parser.add_argument(
        "words",
        nargs=argparse.REMAINDER,
        help="Run these words as a single command line and exit"
    )

    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = ConfigManager(args.config) if args.config else get_config()

    if args.no_line_editor:
        config.update_input(use_line_editor=False)

    configure_logging(args.log_level or config.config.log_level)

    interpreter = EXAMPLES[args.example] if args.example else Cmd
    interpreter.run(argv=args.words, config=config.config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
