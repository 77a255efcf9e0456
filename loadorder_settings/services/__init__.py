"""Service layer: settings persistence, validation, errors and logging."""

from .document import DocumentReader, DocumentWriter, JsonDocument
from .errors import (
    AppError,
    ConfigurationError,
    DocumentParseError,
    DocumentWriteError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FileSystemError,
    UserFriendlyError,
    get_error_service,
)
from .settings_store import SettingsStore
from .validation import check_settings_file

__all__ = [
    "AppError",
    "ConfigurationError",
    "DocumentParseError",
    "DocumentReader",
    "DocumentWriteError",
    "DocumentWriter",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileSystemError",
    "JsonDocument",
    "SettingsStore",
    "UserFriendlyError",
    "check_settings_file",
    "get_error_service",
]
