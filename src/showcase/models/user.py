"""
User model for the showcase application.

A User is created once at signup and never changes afterwards.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from .timestamps import parse_timestamp, require_str


@dataclass(frozen=True)
class User:
    """
    Represents a registered account.

    ``password_digest`` holds a salted one-way hash, never the password itself.
    """

    username: str
    email: str
    password_digest: str
    created_at: datetime

    @classmethod
    def create_new(
        cls,
        username: str,
        email: str,
        password_digest: str,
        created_at: datetime | None = None,
    ) -> "User":
        """
        Create a new User stamped with the current time.

        Args:
            username: Unique account name
            email: Contact email, unique across accounts
            password_digest: Output of the password hasher
            created_at: Registration time (defaults to now)

        Returns:
            New User instance
        """
        return cls(
            username=username,
            email=email,
            password_digest=password_digest,
            created_at=created_at or datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        """Convert User to its persisted dictionary form."""
        return {
            "username": self.username,
            "email": self.email,
            "password_digest": self.password_digest,
            "created_at": self.created_at.isoformat(),
        }

    def to_public_dict(self) -> dict:
        """Fields safe to display to other users."""
        return {
            "username": self.username,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """
        Create User from its persisted dictionary form.

        Raises:
            KeyError: If a required field is missing
            TypeError: If a field has the wrong type
            ValueError: If ``created_at`` is not a timezone-aware ISO-8601 timestamp
        """
        return cls(
            username=require_str(data, "username"),
            email=require_str(data, "email"),
            password_digest=require_str(data, "password_digest"),
            created_at=parse_timestamp(data["created_at"], "created_at"),
        )

    def get_initial(self) -> str:
        """Avatar letter shown on the public profile."""
        return self.username[:1].upper()
