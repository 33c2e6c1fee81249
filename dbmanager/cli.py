"""
Command-line entry point.

Usage:
    db-manager                      Start the UI
    db-manager --logging            Also write the log to the cache directory
    db-manager --theme dark.json    Use a theme file from the config directory
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from dbmanager.app import DbManagerApp
from dbmanager.controller import Controller
from dbmanager.keys import KeysList
from dbmanager.logs import setup_logging
from dbmanager.theme import Theme

APP_NAME = "db-manager"
LOG_FILE_NAME = "db-manager.log"
DEFAULT_THEME = "theme.json"
DEFAULT_KEY_CONFIG = "key_bindings.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliArgs:
    theme: Path
    key_config: Path
    log_file: Path | None
    log_level: str


def get_app_config_path() -> Path:
    path = Path(platformdirs.user_config_dir(APP_NAME))
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_app_cache_path() -> Path:
    path = Path(platformdirs.user_cache_dir(APP_NAME))
    path.mkdir(parents=True, exist_ok=True)
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal dashboard for managing database connections",
    )
    parser.add_argument(
        "-l",
        "--logging",
        action="store_true",
        help="Stores logging output into a cache directory",
    )
    parser.add_argument(
        "-t",
        "--theme",
        default=DEFAULT_THEME,
        help=f"Theme file inside the config directory (default: {DEFAULT_THEME})",
    )
    parser.add_argument(
        "-k",
        "--key-config",
        default=DEFAULT_KEY_CONFIG,
        help=f"Key binding file inside the config directory (default: {DEFAULT_KEY_CONFIG})",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level for the log overlay and log file",
    )
    return parser


def process_cmdline(argv: list[str] | None = None) -> CliArgs:
    args = build_parser().parse_args(argv)
    config_dir = get_app_config_path()
    log_file = get_app_cache_path() / LOG_FILE_NAME if args.logging else None
    return CliArgs(
        theme=config_dir / args.theme,
        key_config=config_dir / args.key_config,
        log_file=log_file,
        log_level=args.log_level,
    )


def main(argv: list[str] | None = None) -> int:
    cli_args = process_cmdline(argv)
    if cli_args.log_file is not None:
        print(f"Logging enabled. log written to: {cli_args.log_file}")

    log_buffer = setup_logging(cli_args.log_level, cli_args.log_file)
    theme = Theme.load(cli_args.theme)
    keys = KeysList.load(cli_args.key_config)

    controller = Controller(theme=theme, keys=keys, log_buffer=log_buffer)
    app = DbManagerApp(controller=controller)
    app.run()

    if app.return_code:
        logger.error("application exited with code %s", app.return_code)
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
