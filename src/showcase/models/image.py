"""
Image model for the showcase application.

This module contains the Image dataclass that represents one uploaded
artwork and the helpers views use to order and describe images.
"""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from .timestamps import parse_timestamp, require_str

DATA_URL_PREFIX = "data:"


@dataclass(frozen=True)
class Image:
    """
    Represents an uploaded image in the showcase gallery.

    ``payload`` is a self-describing ``data:<mime>;base64,<bytes>`` URL so the
    record can be rendered without any other lookup.
    """

    id: str
    owner: str
    payload: str
    title: str
    description: str
    uploaded_at: datetime

    @classmethod
    def create_new(
        cls,
        owner: str,
        payload: str,
        title: str,
        description: str = "",
        image_id: str | None = None,
        uploaded_at: datetime | None = None,
    ) -> "Image":
        """
        Create a new Image with generated ID and current timestamp.

        Args:
            owner: Username of the uploader
            payload: Image data URL
            title: Display title
            description: Optional free text
            image_id: Explicit id (defaults to a random UUID4)
            uploaded_at: Upload time (defaults to now)

        Returns:
            New Image instance
        """
        return cls(
            id=image_id or str(uuid.uuid4()),
            owner=owner,
            payload=payload,
            title=title,
            description=description or "",
            uploaded_at=uploaded_at or datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        """Convert Image to its persisted dictionary form."""
        return {
            "id": self.id,
            "owner": self.owner,
            "payload": self.payload,
            "title": self.title,
            "description": self.description,
            "uploaded_at": self.uploaded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Image":
        """
        Create Image from its persisted dictionary form.

        Raises:
            KeyError: If a required field is missing
            TypeError: If a field has the wrong type
            ValueError: If ``uploaded_at`` is not a timezone-aware ISO-8601 timestamp
        """
        image_id = data["id"]
        if not isinstance(image_id, (str, int, float)) or isinstance(image_id, bool):
            raise TypeError(f"id must be a string or number, got {type(image_id).__name__}")

        description = data.get("description") or ""
        if not isinstance(description, str):
            raise TypeError(f"description must be a string, got {type(description).__name__}")

        return cls(
            id=str(image_id),
            owner=require_str(data, "owner"),
            payload=require_str(data, "payload"),
            title=require_str(data, "title"),
            description=description,
            uploaded_at=parse_timestamp(data["uploaded_at"], "uploaded_at"),
        )

    def validate(self) -> bool:
        """
        Validate the Image instance.

        Returns:
            True if valid, False otherwise
        """
        if not self.id or not self.owner:
            return False

        if not self.title or not self.title.strip():
            return False

        if not self.payload or not self.payload.startswith(DATA_URL_PREFIX + "image/"):
            return False

        return True

    @property
    def mime_type(self) -> str | None:
        """MIME type declared by the payload data URL."""
        if not self.payload.startswith(DATA_URL_PREFIX):
            return None
        header = self.payload[len(DATA_URL_PREFIX) :].split(",", 1)[0]
        return header.split(";", 1)[0] or None

    def get_display_date(self) -> str:
        """Upload date as shown under each card."""
        return self.uploaded_at.strftime("%Y-%m-%d")


def sort_by_recency(images: Iterable[Image]) -> list[Image]:
    """Return images newest first."""
    return sorted(images, key=lambda image: image.uploaded_at, reverse=True)
