"""
Centralized error classification for the showcase application.

Every failure a Store operation can signal is a ``ShowcaseError`` subclass
carrying a category, a stable ``code`` and a message safe to show to users.
Errors log themselves on construction.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .logging_config import get_logger, log_error, log_security_event

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorInfo:
    """Structured error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    user_message: str
    details: dict[str, Any]
    timestamp: datetime
    recoverable: bool = True
    retry_suggested: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
        }


class ShowcaseError(Exception):
    """Base exception class for the showcase application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        retry_suggested: bool = False,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or self._generate_user_message()
        self.details = details or {}
        self.recoverable = recoverable
        self.retry_suggested = retry_suggested
        self.original_exception = original_exception
        self.timestamp = datetime.now(UTC)

        self._log_error()

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message."""
        user_messages = {
            ErrorCategory.AUTHENTICATION: "Invalid credentials",
            ErrorCategory.AUTHORIZATION: "You are not allowed to do that.",
            ErrorCategory.VALIDATION: "Please check the form and try again.",
            ErrorCategory.NOT_FOUND: "That item no longer exists.",
            ErrorCategory.PERSISTENCE: "Your changes could not be saved. Please try again.",
            ErrorCategory.UNKNOWN: "Something went wrong.",
        }
        return user_messages.get(self.category, "Something went wrong.")

    def _log_error(self) -> None:
        """Log the error with appropriate level."""
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            "retry_suggested": self.retry_suggested,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        log_error(self, error_context)

        if self.category in [ErrorCategory.AUTHENTICATION, ErrorCategory.AUTHORIZATION]:
            log_security_event(self.category.value, code=self.code)

    def get_error_info(self) -> ErrorInfo:
        """Get structured error information."""
        return ErrorInfo(
            category=self.category,
            severity=self.severity,
            code=self.code,
            message=str(self),
            user_message=self.user_message,
            details=self.details,
            timestamp=self.timestamp,
            recoverable=self.recoverable,
            retry_suggested=self.retry_suggested,
        )


class ValidationError(ShowcaseError):
    """Rejected input: empty title, missing payload, short password and the like."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            code=code or "validation_failed",
            user_message=user_message or message,
            details=details,
            recoverable=True,
            retry_suggested=False,
        )


class DuplicateUsernameError(ValidationError):
    """Registration with a username that is already taken."""

    def __init__(self, username: str):
        super().__init__(
            f"Username '{username}' already exists",
            code="duplicate_username",
            user_message="Username already exists",
            details={"username": username},
        )
        self.username = username


class DuplicateEmailError(ValidationError):
    """Registration with an email that another account already uses."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="duplicate_email",
            user_message="Email already registered",
        )
        self.email = email


class InvalidCredentialsError(ShowcaseError):
    """Unknown username or wrong password. The two cases are deliberately indistinguishable."""

    def __init__(self, username: str):
        super().__init__(
            message="Invalid credentials",
            category=ErrorCategory.AUTHENTICATION,
            severity=ErrorSeverity.MEDIUM,
            code="invalid_credentials",
            user_message="Invalid credentials",
            details={"username": username},
            recoverable=True,
            retry_suggested=True,
        )
        self.username = username


class ForbiddenError(ShowcaseError):
    """A user tried to act on an image owned by someone else."""

    def __init__(self, image_id: str, username: str):
        super().__init__(
            message=f"User '{username}' does not own image '{image_id}'",
            category=ErrorCategory.AUTHORIZATION,
            severity=ErrorSeverity.HIGH,
            code="forbidden",
            user_message="You can only delete your own images.",
            details={"image_id": image_id, "username": username},
            recoverable=True,
            retry_suggested=False,
        )


class ImageNotFoundError(ShowcaseError):
    """No image with the requested id exists."""

    def __init__(self, image_id: str):
        super().__init__(
            message=f"Image '{image_id}' not found",
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            code="image_not_found",
            details={"image_id": image_id},
            recoverable=True,
            retry_suggested=False,
        )


class PersistenceError(ShowcaseError):
    """The key-value medium failed to read or write a value."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.PERSISTENCE,
            severity=ErrorSeverity.HIGH,
            code="persistence_failed",
            details={"key": key} if key else None,
            recoverable=False,
            retry_suggested=True,
            original_exception=original_exception,
        )
        self.key = key


class CorruptStateError(ShowcaseError):
    """A persisted value could not be decoded and was replaced with its default."""

    def __init__(self, key: str, reason: str, original_exception: Exception | None = None):
        super().__init__(
            message=f"Persisted value '{key}' is malformed: {reason}",
            category=ErrorCategory.PERSISTENCE,
            severity=ErrorSeverity.MEDIUM,
            code="corrupt_state",
            user_message="Some saved data could not be read and was reset.",
            details={"key": key, "reason": reason},
            recoverable=True,
            retry_suggested=False,
            original_exception=original_exception,
        )
        self.key = key
        self.reason = reason


def describe_error(error: Exception) -> ErrorInfo:
    """
    Turn any exception into structured error information for display.

    Args:
        error: Exception raised by a Store operation or anything beneath it

    Returns:
        ErrorInfo: The error's own info, or an UNKNOWN wrapper for foreign exceptions
    """
    if isinstance(error, ShowcaseError):
        return error.get_error_info()

    wrapped = ShowcaseError(
        message=str(error),
        details={"original_type": type(error).__name__},
        original_exception=error,
    )
    return wrapped.get_error_info()
