"""
Unit tests for the error hierarchy.
"""

from unittest.mock import patch

import pytest

from showcase.error_handling import (
    CorruptStateError,
    DuplicateEmailError,
    DuplicateUsernameError,
    ErrorCategory,
    ErrorSeverity,
    ForbiddenError,
    ImageNotFoundError,
    InvalidCredentialsError,
    PersistenceError,
    ShowcaseError,
    ValidationError,
    describe_error,
)


class TestErrorClassification:
    """Test codes and categories of each error type."""

    @pytest.mark.parametrize(
        "error,category,code",
        [
            (DuplicateUsernameError("alice"), ErrorCategory.VALIDATION, "duplicate_username"),
            (DuplicateEmailError("a@x.com"), ErrorCategory.VALIDATION, "duplicate_email"),
            (InvalidCredentialsError("alice"), ErrorCategory.AUTHENTICATION, "invalid_credentials"),
            (ForbiddenError("image-1", "bob"), ErrorCategory.AUTHORIZATION, "forbidden"),
            (ImageNotFoundError("image-1"), ErrorCategory.NOT_FOUND, "image_not_found"),
            (PersistenceError("disk full", key="images"), ErrorCategory.PERSISTENCE, "persistence_failed"),
            (CorruptStateError("users", "invalid JSON"), ErrorCategory.PERSISTENCE, "corrupt_state"),
        ],
    )
    def test_category_and_code(self, error, category, code):
        """Test each error carries its category and stable code."""
        assert isinstance(error, ShowcaseError)
        assert error.category is category
        assert error.code == code
        assert error.user_message

    def test_duplicates_are_validation_errors(self):
        """Test duplicate errors can be caught as ValidationError."""
        assert isinstance(DuplicateUsernameError("alice"), ValidationError)
        assert isinstance(DuplicateEmailError("a@x.com"), ValidationError)

    def test_validation_defaults(self):
        """Test ValidationError falls back to its message for users."""
        error = ValidationError("Title is required")

        assert error.code == "validation_failed"
        assert error.user_message == "Title is required"
        assert error.severity is ErrorSeverity.LOW

    def test_persistence_error_attributes(self):
        """Test PersistenceError keeps the failing key and cause."""
        cause = OSError("disk full")
        error = PersistenceError("write failed", key="images", original_exception=cause)

        assert error.key == "images"
        assert error.original_exception is cause
        assert error.recoverable is False
        assert error.retry_suggested is True

    def test_corrupt_state_attributes(self):
        """Test CorruptStateError exposes key and reason."""
        error = CorruptStateError("currentUser", "expected a string")

        assert error.key == "currentUser"
        assert error.reason == "expected a string"
        assert "currentUser" in str(error)

    def test_base_error_generates_user_message(self):
        """Test the category-based fallback message."""
        error = ShowcaseError("boom", category=ErrorCategory.PERSISTENCE)

        assert error.code == "persistence_error"
        assert error.user_message == "Your changes could not be saved. Please try again."


class TestErrorLogging:
    """Test errors log themselves on construction."""

    @patch("showcase.error_handling.log_security_event")
    @patch("showcase.error_handling.log_error")
    def test_validation_error_logs(self, mock_log_error, mock_security):
        """Test non-security errors go to the error log only."""
        error = ValidationError("bad", code="missing_title")

        mock_log_error.assert_called_once()
        assert mock_log_error.call_args[0][0] is error
        assert mock_log_error.call_args[0][1]["code"] == "missing_title"
        mock_security.assert_not_called()

    @patch("showcase.error_handling.log_security_event")
    @patch("showcase.error_handling.log_error")
    def test_auth_errors_log_security_events(self, mock_log_error, mock_security):
        """Test authentication and authorization errors are security events."""
        InvalidCredentialsError("alice")
        ForbiddenError("image-1", "bob")

        assert mock_security.call_count == 2
        assert mock_security.call_args_list[0][0][0] == "authentication"
        assert mock_security.call_args_list[1][0][0] == "authorization"


class TestErrorInfo:
    """Test structured error information."""

    def test_get_error_info_to_dict(self):
        """Test ErrorInfo serialization."""
        info = ForbiddenError("image-1", "bob").get_error_info().to_dict()

        assert info["category"] == "authorization"
        assert info["severity"] == "high"
        assert info["code"] == "forbidden"
        assert info["user_message"] == "You can only delete your own images."
        assert info["details"] == {"image_id": "image-1", "username": "bob"}
        assert "T" in info["timestamp"]

    def test_describe_showcase_error(self):
        """Test describe_error passes ShowcaseError info through."""
        error = ImageNotFoundError("image-1")

        assert describe_error(error).code == "image_not_found"

    def test_describe_foreign_error(self):
        """Test describe_error wraps unexpected exceptions."""
        info = describe_error(KeyError("oops"))

        assert info.category is ErrorCategory.UNKNOWN
        assert info.user_message == "Something went wrong."
        assert info.details["original_type"] == "KeyError"
