"""Command-line entry point for inspecting and editing the settings file.

This module provides:
- Command-line argument parsing
- Loading the settings store and reporting advisory warnings
- Turning settings errors into user-facing messages
"""

import argparse
import json
import sys
from pathlib import Path

import structlog

from . import __version__
from .services.errors import get_error_service
from .services.logging import setup_logging
from .services.serialization import state_to_document
from .services.settings_store import SettingsStore


log = structlog.stdlib.get_logger()

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "loadorder-settings"
SETTINGS_FILE_NAME = "settings.json"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}

_STRING_SETTINGS = {
    "game": SettingsStore.set_default_game,
    "language": SettingsStore.set_language,
    "theme": SettingsStore.set_theme,
    "prelude_source": SettingsStore.set_prelude_source,
    "last_game": SettingsStore.store_last_game,
}

_BOOL_SETTINGS = {
    "auto_sort": SettingsStore.set_auto_sort,
    "enable_debug_logging": SettingsStore.enable_debug_logging,
    "update_masterlist": SettingsStore.update_masterlist,
    "enable_update_check": SettingsStore.enable_update_check,
}


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        command: str,
        data_dir: Path,
        settings: Path,
        log_level: str,
        log_dir: Path | None,
        verbose: bool,
        key: str | None = None,
        value: str | None = None,
    ) -> None:
        self.command: str = command
        self.data_dir: Path = data_dir
        self.settings: Path = settings
        self.log_level: str = log_level
        self.log_dir: Path | None = log_dir
        self.verbose: bool = verbose
        self.key: str | None = key
        self.value: str | None = value


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="loadorder-settings",
        description="Inspect and edit the load order manager's settings file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  loadorder-settings show                     Print the current settings
  loadorder-settings check                    List leftover game data
  loadorder-settings set theme dark           Change one setting and save
  loadorder-settings --settings ./s.json show Use a different settings file
        """
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Application data directory (default: {DEFAULT_DATA_DIR})"
    )
    _ = parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help=f"Settings file (default: <data-dir>/{SETTINGS_FILE_NAME})"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)"
    )
    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: no log files)"
    )
    _ = parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also write log output to the console"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    _ = commands.add_parser("show", help="Print the settings as JSON")
    _ = commands.add_parser("check", help="Report leftover or conflicting game data")
    set_parser = commands.add_parser("set", help="Change one setting and save")
    _ = set_parser.add_argument("key", choices=sorted([*_STRING_SETTINGS, *_BOOL_SETTINGS]))
    _ = set_parser.add_argument("value")

    ns = parser.parse_args(argv)

    data_dir: Path = ns.data_dir
    return ParsedArgs(
        command=ns.command,
        data_dir=data_dir,
        settings=ns.settings or data_dir / SETTINGS_FILE_NAME,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
        verbose=bool(ns.verbose),
        key=getattr(ns, "key", None),
        value=getattr(ns, "value", None),
    )


def parse_bool(value: str) -> bool:
    """Parse a yes/no style command-line value."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected true or false, got {value!r}")


def apply_setting(store: SettingsStore, key: str, value: str) -> None:
    """Apply one ``set KEY VALUE`` command to the store."""
    if key in _BOOL_SETTINGS:
        _BOOL_SETTINGS[key](store, parse_bool(value))
    elif key in _STRING_SETTINGS:
        _STRING_SETTINGS[key](store, value)
    else:
        raise ValueError(f"Unknown setting: {key}")


def run(args: ParsedArgs) -> int:
    """Run one command.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    logging_service = setup_logging(
        log_level=args.log_level,
        log_dir=args.log_dir,
        console=args.verbose,
    )
    store = SettingsStore()
    operation = "load"

    try:
        warnings = store.load(args.settings, args.data_dir)
        logging_service.apply_debug_setting(store.is_debug_logging_enabled())

        if args.command == "show":
            document = state_to_document(store.snapshot())
            print(json.dumps(document, indent=2, ensure_ascii=False))
        elif args.command == "check":
            for warning in warnings:
                print(warning)
            if not warnings:
                print("No problems found.")
        elif args.command == "set" and args.key is not None and args.value is not None:
            operation = "set"
            apply_setting(store, args.key, args.value)
            operation = "save"
            store.save(args.settings)
            print(f"{args.key} = {args.value}")
        return 0

    except Exception as e:
        error_service = get_error_service()
        error = error_service.handle_error(
            e,
            operation=operation,
            component="cli",
            context={"path": str(args.settings), "setting": args.key, "value": args.value},
        )
        print(error_service.create_user_message(error), file=sys.stderr)
        return 1


def main() -> None:
    """Main entry point for the application."""
    args = parse_arguments()
    exit_code = run(args)
    log.info("Exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
