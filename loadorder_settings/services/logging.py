"""Logging for the settings store and its front ends.

Records go through structlog into standard library handlers. Given a log
directory, each run starts a fresh ``debug.log`` (the previous run's log is
kept as ``debug.log.1`` and so on) and errors are collected in ``error.log``
across runs. Debug records are only kept while the user has debug logging
enabled in their settings; see ``LoggingService.apply_debug_setting``.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from .. import __version__


LOG_FILE_NAME = "debug.log"
ERROR_LOG_FILE_NAME = "error.log"

# Previous runs of debug.log kept beside the current one
DEBUG_LOG_BACKUPS = 3
ERROR_LOG_MAX_BYTES = 5 * 1024 * 1024


def add_app_version(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Stamp records with the version that wrote them."""
    event_dict.setdefault("version", __version__)
    return event_dict


class LoggingService:
    """Configures structlog and the log files for one process."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: Level used while debug logging is disabled
            log_dir: Directory for debug.log and error.log (None for no files)
            console: If False, nothing is written to stdout
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def base_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def configure(self) -> None:
        """Replace the root handlers and configure structlog on top of them."""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()

        # Handlers pass everything the root level lets through, so toggling
        # debug logging only has to move the root level.
        root_logger.setLevel(self.base_level)
        if self.console:
            root_logger.addHandler(self._console_handler())
        if self.log_dir:
            root_logger.addHandler(self._debug_file_handler(self.log_dir))
            root_logger.addHandler(self._error_file_handler(self.log_dir))

        structlog.configure(
            processors=self._processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def apply_debug_setting(self, enabled: bool) -> None:
        """Follow the user's debug logging preference.

        Enabling lowers the root logger to DEBUG; disabling restores the
        level this service was created with. error.log is unaffected.
        """
        logging.getLogger().setLevel(logging.DEBUG if enabled else self.base_level)

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        if self.is_development:
            handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            ))
        else:
            handler.setFormatter(logging.Formatter("%(message)s"))
        return handler

    @staticmethod
    def _debug_file_handler(log_dir: Path) -> logging.Handler:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / LOG_FILE_NAME
        previous_run = path.exists() and path.stat().st_size > 0

        handler = logging.handlers.RotatingFileHandler(
            filename=path,
            backupCount=DEBUG_LOG_BACKUPS,
            encoding="utf-8",
        )
        if previous_run:
            handler.doRollover()
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler

    @staticmethod
    def _error_file_handler(log_dir: Path) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / ERROR_LOG_FILE_NAME,
            maxBytes=ERROR_LOG_MAX_BYTES,
            backupCount=1,
            encoding="utf-8",
        )
        handler.setLevel(logging.ERROR)
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler

    def _processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_app_version,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        # Files are always JSON; a bare development terminal gets the console renderer
        if self.is_development and not self.log_dir:
            return processors + [structlog.dev.ConsoleRenderer(colors=True)]
        return processors + [structlog.processors.JSONRenderer()]


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
) -> LoggingService:
    """Configure logging for this process.

    Args:
        log_level: Level used while debug logging is disabled
        log_dir: Directory for log files (None for no files)
        environment: Environment name (development/production)
        console: Whether to log to stdout as well

    Returns:
        The configured LoggingService
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console)
    service.configure()
    return service
