"""Thread-safe store for the application's settings."""

import threading
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from .. import __version__
from ..models import Filters, GameConfig, Language, SettingsState, WindowPosition
from .document import DocumentReader, DocumentWriter, JsonDocument
from .errors import FileSystemError
from .serialization import merge_document, state_to_document
from .validation import check_settings_file

log = structlog.stdlib.get_logger()


class SettingsStore:
    """Owns the application settings and their load/save lifecycle.

    A new store holds the built-in defaults, so it is usable before (and
    without) a successful load. All state lives in one immutable
    SettingsState value; every public method takes the store's reentrant
    lock and replaces that value in a single assignment, so callers on other
    threads never see a half-applied change.
    """

    def __init__(
        self,
        reader: DocumentReader | None = None,
        writer: DocumentWriter | None = None,
    ) -> None:
        document = JsonDocument()
        self._reader: DocumentReader = reader or document
        self._writer: DocumentWriter = writer or document
        self._lock = threading.RLock()
        self._state = SettingsState()

    def _update(self, **changes: Any) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)

    # --- Lifecycle ---

    def load(self, document_path: Path, data_path: Path) -> list[str]:
        """Merge a settings document into the current settings.

        Keys present in the document replace the current values; absent keys
        keep them. Built-in games are never removed by a document that omits
        them. A missing document is the first-run case and is not an error.

        Args:
            document_path: The settings document to read
            data_path: The application data directory to check for leftovers

        Returns:
            Advisory warnings about the document and the data directory

        Raises:
            DocumentParseError: If the document is malformed; settings are unchanged
            FileSystemError: If the document exists but cannot be read
        """
        with self._lock:
            state = self._state
            warnings: list[str] = []
            if self._document_exists(document_path):
                data = self._reader.read(document_path)
                state, warnings = merge_document(state, data, path=document_path)
                log.debug("Settings document merged", path=str(document_path), games=len(state.game_configs))
            else:
                log.debug("No settings file found, keeping current settings", path=str(document_path))

            warnings.extend(check_settings_file(data_path, state.game_configs))
            self._state = state
            for warning in warnings:
                log.debug("Settings advisory", warning=warning)
            return warnings

    @staticmethod
    def _document_exists(document_path: Path) -> bool:
        try:
            return document_path.exists()
        except OSError as e:
            raise FileSystemError(
                "The settings file could not be checked.",
                original_error=e,
                path=document_path,
                operation="load",
            ) from e

    def save(self, document_path: Path) -> None:
        """Write the current settings to a document, replacing it atomically.

        Records the running version as the last version to write the file.

        Raises:
            DocumentWriteError: If the document could not be written; settings are unchanged
        """
        with self._lock:
            state = replace(self._state, last_known_version=__version__)
            self._writer.write(state_to_document(state), document_path)
            self._state = state
            log.debug("Settings saved", path=str(document_path))

    def snapshot(self) -> SettingsState:
        """Get the complete current settings as one consistent value."""
        with self._lock:
            return self._state

    # --- Accessors ---

    def should_auto_sort(self) -> bool:
        with self._lock:
            return self._state.auto_sort

    def is_debug_logging_enabled(self) -> bool:
        with self._lock:
            return self._state.debug_logging_enabled

    def is_masterlist_update_enabled(self) -> bool:
        with self._lock:
            return self._state.masterlist_update_enabled

    def is_update_check_enabled(self) -> bool:
        with self._lock:
            return self._state.update_check_enabled

    def get_game(self) -> str:
        with self._lock:
            return self._state.current_game

    def get_last_game(self) -> str:
        with self._lock:
            return self._state.last_game

    def get_last_version(self) -> str:
        with self._lock:
            return self._state.last_known_version

    def get_language(self) -> str:
        with self._lock:
            return self._state.language

    def get_theme(self) -> str:
        with self._lock:
            return self._state.theme

    def get_prelude_source(self) -> str:
        with self._lock:
            return self._state.prelude_source

    def get_window_position(self) -> WindowPosition | None:
        with self._lock:
            return self._state.window_position

    def get_game_settings(self) -> tuple[GameConfig, ...]:
        with self._lock:
            return self._state.game_configs

    def get_filters(self) -> Filters:
        with self._lock:
            return self._state.filters

    def get_languages(self) -> tuple[Language, ...]:
        with self._lock:
            return self._state.languages

    # --- Mutators ---
    # Values are stored as given: a language or game that is not in its
    # catalog is accepted and left for consumers to resolve.

    def set_default_game(self, game: str) -> None:
        self._update(current_game=game)

    def set_language(self, language: str) -> None:
        self._update(language=language)

    def set_theme(self, theme: str) -> None:
        self._update(theme=theme)

    def set_prelude_source(self, source: str) -> None:
        self._update(prelude_source=source)

    def set_auto_sort(self, auto_sort: bool) -> None:
        self._update(auto_sort=auto_sort)

    def enable_debug_logging(self, enable: bool) -> None:
        self._update(debug_logging_enabled=enable)

    def update_masterlist(self, update: bool) -> None:
        self._update(masterlist_update_enabled=update)

    def enable_update_check(self, enable: bool) -> None:
        self._update(update_check_enabled=enable)

    def store_last_game(self, last_game: str) -> None:
        self._update(last_game=last_game)

    def store_window_position(self, position: WindowPosition) -> None:
        self._update(window_position=position)

    def store_game_settings(self, game_settings: Iterable[GameConfig]) -> None:
        """Replace the whole game list. Unlike load, nothing is merged back in."""
        self._update(game_configs=tuple(game_settings))

    def store_filters(self, filters: Filters) -> None:
        self._update(filters=filters)

    def update_last_version(self) -> None:
        """Record the running version without saving."""
        self._update(last_known_version=__version__)
