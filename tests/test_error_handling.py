"""Tests for error conversion and user-facing messages."""

import json

import pytest
from hypothesis import given, strategies as st

from loadorder_settings.services import (
    AppError,
    ConfigurationError,
    DocumentParseError,
    DocumentWriteError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FileSystemError,
    UserFriendlyError,
)


class TestErrorTypes:
    """Test cases for the settings error classes."""

    def test_document_parse_error(self) -> None:
        original = json.JSONDecodeError("Expecting value", "{", 1)
        error = DocumentParseError("bad file", path="/tmp/settings.json", setting="theme", original_error=original)

        assert isinstance(error, ConfigurationError)
        assert error.category is ErrorCategory.CONFIGURATION
        assert error.path == "/tmp/settings.json"
        assert error.original_error is original
        assert error.technical_details is not None
        assert error.technical_details.startswith("Path: /tmp/settings.json")
        assert "Setting: theme" in error.technical_details

    def test_document_write_error(self) -> None:
        error = DocumentWriteError("cannot save", path="/tmp/settings.json", original_error=PermissionError("denied"))

        assert isinstance(error, FileSystemError)
        assert error.category is ErrorCategory.FILE_SYSTEM
        assert error.operation == "save"
        assert "Check the permissions of the settings folder" in error.suggested_actions

    def test_parse_error_at_path(self) -> None:
        error = DocumentParseError("Setting \"theme\" must be a string", setting="theme", expected="a string")

        located = error.at_path("/tmp/settings.json")

        assert located.path == "/tmp/settings.json"
        assert located.message == error.message
        assert located.setting == "theme"
        assert located.technical_details is not None
        assert located.technical_details.startswith("Path: /tmp/settings.json")
        assert "Expected: a string" in located.suggested_actions

    def test_to_user_friendly(self) -> None:
        error = ConfigurationError("Setting is wrong", setting="language", expected="a locale")

        friendly = error.to_user_friendly()

        assert friendly.message == "Setting is wrong"
        assert friendly.severity is ErrorSeverity.ERROR
        assert "Expected: a locale" in friendly.suggested_actions


class TestErrorHandlingService:
    """Test cases for ErrorHandlingService."""

    @pytest.mark.parametrize("error, category", [
        (PermissionError("denied"), ErrorCategory.FILE_SYSTEM),
        (FileNotFoundError("gone"), ErrorCategory.FILE_SYSTEM),
        (OSError("disk full"), ErrorCategory.FILE_SYSTEM),
        (json.JSONDecodeError("Expecting value", "", 0), ErrorCategory.CONFIGURATION),
        (ValueError("bad value"), ErrorCategory.CONFIGURATION),
        (RuntimeError("boom"), ErrorCategory.UNEXPECTED),
    ])
    def test_conversion(self, error: Exception, category: ErrorCategory) -> None:
        service = ErrorHandlingService()

        friendly = service.handle_error(error, operation="load", component="test", context={"path": "/x"})

        assert isinstance(friendly, UserFriendlyError)
        assert friendly.category is category
        assert friendly.message

    def test_invalid_values_are_warnings(self) -> None:
        """A bad value typed by the user is reported but is not a failure of the store."""
        service = ErrorHandlingService()

        friendly = service.handle_error(
            ValueError("Expected true or false, got 'maybe'"),
            operation="set",
            component="cli",
            context={"setting": "auto_sort", "value": "maybe"},
        )

        assert friendly.severity is ErrorSeverity.WARNING
        assert friendly.technical_details is not None
        assert "Setting: auto_sort" in friendly.technical_details

    def test_file_system_errors_are_errors(self) -> None:
        service = ErrorHandlingService()

        friendly = service.handle_error(PermissionError("denied"), operation="save", component="cli")

        assert friendly.severity is ErrorSeverity.ERROR

    def test_app_errors_pass_through(self) -> None:
        service = ErrorHandlingService()
        error = DocumentWriteError("cannot save", path="/x")

        friendly = service.handle_error(error, operation="save", component="test")

        assert friendly.message == "cannot save"
        assert service.get_recent_errors() == [error]

    def test_history_is_bounded(self) -> None:
        service = ErrorHandlingService()

        for index in range(150):
            service.handle_error(AppError(f"error {index}"), operation="op", component="test")

        recent = service.get_recent_errors(count=200)
        assert len(recent) == 100
        assert recent[-1].message == "error 149"

    @given(
        message=st.text(min_size=1, max_size=100),
        actions=st.lists(st.text(min_size=1, max_size=30), max_size=6),
    )
    def test_user_message_format(self, message: str, actions: list[str]) -> None:
        """The message comes first and at most three suggestions follow."""
        service = ErrorHandlingService()
        error = UserFriendlyError(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            suggested_actions=actions,
        )

        text = service.create_user_message(error)

        assert text.startswith(message)
        assert text.count("  • ") >= min(len(actions), 3)
        if not actions:
            assert text == message
        assert service.create_user_message(error, include_suggestions=False) == message
