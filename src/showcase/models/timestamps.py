"""Timestamp parsing shared by the persisted models."""

from datetime import datetime


def parse_timestamp(value: object, field: str) -> datetime:
    """
    Parse a persisted ISO-8601 timestamp.

    Args:
        value: Raw value read from storage
        field: Field name, for error messages

    Returns:
        Timezone-aware datetime

    Raises:
        TypeError: If the value is not a string
        ValueError: If the string is not ISO-8601 or carries no UTC offset
    """
    if not isinstance(value, str):
        raise TypeError(f"{field} must be an ISO-8601 string, got {type(value).__name__}")

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"{field} has no UTC offset: {value!r}")

    return parsed


def require_str(data: dict, field: str) -> str:
    """Read a required string field from a persisted record."""
    value = data[field]
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    return value
