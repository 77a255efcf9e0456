"""Error types and error presentation for the settings store.

This module provides:
- Exception classes for settings document failures (parse, write) and
  file system problems
- Conversion of arbitrary exceptions into user-friendly errors with
  suggested actions
- A shared error handling service used by the command-line front end
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


def _describe(original_error: Exception | None, path: Path | str | None) -> str | None:
    technical_details = None
    if original_error:
        technical_details = f"{type(original_error).__name__}: {original_error}"
    if path:
        technical_details = f"Path: {path}" + (f"\n{technical_details}" if technical_details else "")
    return technical_details


class FileSystemError(AppError):
    """Exception for file system-related errors."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        path: Path | str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.FILE_SYSTEM,
            severity=ErrorSeverity.ERROR,
            suggested_actions=self._get_suggested_actions(original_error),
            technical_details=_describe(original_error, path),
            recoverable=True,
        )
        self.original_error = original_error
        self.path = path
        self.operation = operation

    @staticmethod
    def _get_suggested_actions(original_error: Exception | None) -> list[str]:
        """Get suggested actions based on error type."""
        if isinstance(original_error, PermissionError):
            return [
                "Check the permissions of the settings folder",
                "Make sure the settings file is not marked read-only",
            ]
        elif isinstance(original_error, FileNotFoundError):
            return [
                "Verify the settings folder still exists",
                "Choose a different settings location",
            ]
        elif isinstance(original_error, OSError):
            error_str = str(original_error).lower()
            if "no space" in error_str or "disk full" in error_str:
                return [
                    "Free up disk space",
                    "Try saving again",
                ]
            elif "read-only" in error_str:
                return [
                    "The file system is read-only",
                    "Choose a different settings location",
                ]

        return [
            "Check the file path and permissions",
            "Ensure sufficient disk space",
        ]


class ConfigurationError(AppError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        suggested_actions = [
            "Check the settings file",
            "Delete the settings file to restore the defaults",
        ]
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        technical_details = None
        if setting:
            technical_details = f"Setting: {setting}"
        if current_value is not None:
            technical_details = (technical_details or "") + f"\nCurrent: {str(current_value)[:100]}"

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=severity,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


class DocumentParseError(ConfigurationError):
    """Raised when a settings document exists but cannot be understood."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, setting=setting, current_value=current_value, expected=expected)
        details = _describe(original_error, path)
        if details:
            self.technical_details = details + (f"\n{self.technical_details}" if self.technical_details else "")
        self.path = path
        self.original_error = original_error

    def at_path(self, path: Path | str) -> "DocumentParseError":
        """Get a copy of this error that names the document it came from."""
        return DocumentParseError(
            self.message,
            path=path,
            setting=self.setting,
            current_value=self.current_value,
            expected=self.expected,
            original_error=self.original_error,
        )


class DocumentWriteError(FileSystemError):
    """Raised when a settings document could not be written."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error=original_error, path=path, operation="save")


class ErrorHandlingService:
    """Turns exceptions into user-facing messages and keeps a short history.

    The settings store raises; whoever presents errors to the user (the
    command-line front end, a GUI) routes them through this service.
    """

    def __init__(self) -> None:
        self._error_history: list[tuple[float, AppError]] = []
        self._max_history_size = 100

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self._convert_to_app_error(error, operation, component, context)
        self._log_error(app_error, operation, component, context)

        self._error_history.append((time.time(), app_error))
        if len(self._error_history) > self._max_history_size:
            self._error_history.pop(0)

        return app_error.to_user_friendly()

    def _convert_to_app_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> AppError:
        """Convert a standard exception to an AppError."""
        if isinstance(error, AppError):
            return error

        path = context.get("path") if context else None
        if isinstance(error, PermissionError):
            return FileSystemError(
                message="Permission denied. You don't have access to this file or directory.",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, FileNotFoundError):
            return FileSystemError(
                message="The file or directory was not found.",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, OSError):
            return FileSystemError(
                message=f"A file system error occurred: {error}",
                original_error=error,
                path=path,
                operation=operation,
            )
        elif isinstance(error, json.JSONDecodeError):
            return DocumentParseError(
                message="The settings file is not valid JSON.",
                path=path,
                original_error=error,
            )
        elif isinstance(error, (ValueError, TypeError)):
            return ConfigurationError(
                message=str(error),
                setting=context.get("setting") if context else None,
                current_value=context.get("value") if context else None,
                severity=ErrorSeverity.WARNING,
            )

        return AppError(
            message="An unexpected error occurred. Please try again.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {error}",
            recoverable=True,
            context=ErrorContext(
                operation=operation,
                component=component,
                details=context or {},
            ),
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """Get the most recent handled errors, oldest first."""
        recent = self._error_history[-count:] if self._error_history else []
        return [error for _, error in recent]

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:
                parts.append(f"  • {action}")

        return "\n".join(parts)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service

