"""
Store service for the showcase gallery.

The Store is the single owner of the gallery's persisted state:

1. The user registry (``users``): username -> User
2. The image registry (``images``): images in upload order
3. The session pointer (``currentUser``): the logged-in username, if any

Each value lives under its own key in an injected ``KeyValueStore``. State is
loaded once at construction; every successful mutation rewrites the affected
value before the in-memory copy is replaced, so a persistence failure leaves
the Store exactly as it was.

Usage Examples:
    store = Store(create_key_value_store())

    store.register("alice", "alice@example.com", "secret1")
    store.authenticate("alice", "secret1")

    image = store.upload_image("alice", png_bytes, "Sunset")
    if not store.delete_image(image.id, "bob"):
        ...  # DeleteResult.FORBIDDEN
"""

import json
import random
import re
import threading
import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..error_handling import (
    CorruptStateError,
    DuplicateEmailError,
    DuplicateUsernameError,
    ForbiddenError,
    ImageNotFoundError,
    InvalidCredentialsError,
    ValidationError,
)
from ..logging_config import get_logger, log_performance, log_security_event, log_user_action
from ..models.image import Image
from ..models.user import User
from .image_payload import normalize_payload
from .passwords import PasswordHasher
from .persistence import KeyValueStore, create_key_value_store

logger = get_logger(__name__)

USERS_KEY = "users"
IMAGES_KEY = "images"
CURRENT_USER_KEY = "currentUser"

MIN_PASSWORD_LENGTH = 6
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class DeleteResult(Enum):
    """Outcome of a delete request. Only ``DELETED`` is truthy."""

    DELETED = "deleted"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"

    def __bool__(self) -> bool:
        return self is DeleteResult.DELETED


def normalize_email(email: str) -> str:
    """Canonical form used for email uniqueness checks."""
    return email.strip().casefold()


class Store:
    """
    Durable CRUD over users, images and the current session.

    All mutations are serialized by one re-entrant lock; Streamlit serves
    each browser session from its own thread.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        password_hasher: PasswordHasher | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Load persisted state from ``kv_store``.

        Args:
            kv_store: Persistence medium holding the three gallery values
            password_hasher: Password hasher (defaults to bcrypt with configured rounds)
            id_factory: Image id generator (defaults to UUID4 strings)
            clock: Current-time source (defaults to UTC now)

        Raises:
            PersistenceError: If the medium itself cannot be read
        """
        self._kv = kv_store
        self._hasher = password_hasher or PasswordHasher()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._now = clock or (lambda: datetime.now(UTC))
        self._lock = threading.RLock()

        self.load_errors: list[CorruptStateError] = []

        start = time.perf_counter()
        self._users: dict[str, User] = self._load_users()
        self._images: list[Image] = self._load_images()
        self._current_user: str | None = self._load_current_user()

        log_performance(
            "store_load",
            time.perf_counter() - start,
            users=len(self._users),
            images=len(self._images),
            session_restored=self._current_user is not None,
            corrupt_values=len(self.load_errors),
        )

    # Loading

    def _read_json(self, key: str) -> Any:
        """Read and decode one persisted value. Returns None when absent or unreadable."""
        raw = self._kv.load(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            self._record_corruption(key, "invalid JSON", e)
            return None

    def _record_corruption(self, key: str, reason: str, error: Exception | None = None) -> None:
        self.load_errors.append(CorruptStateError(key, reason, original_exception=error))
        logger.warning("corrupt_state_recovered", key=key, reason=reason)

    def _load_users(self) -> dict[str, User]:
        data = self._read_json(USERS_KEY)
        if data is None:
            return {}

        if not isinstance(data, dict):
            self._record_corruption(USERS_KEY, f"expected an object, got {type(data).__name__}")
            return {}

        try:
            users = {username: User.from_dict(record) for username, record in data.items()}
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._record_corruption(USERS_KEY, f"malformed user record: {e}", e)
            return {}

        mismatched = [key for key, user in users.items() if user.username != key]
        if mismatched:
            self._record_corruption(USERS_KEY, f"records stored under another username: {mismatched}")
            return {}

        return users

    def _load_images(self) -> list[Image]:
        data = self._read_json(IMAGES_KEY)
        if data is None:
            return []

        if not isinstance(data, list):
            self._record_corruption(IMAGES_KEY, f"expected an array, got {type(data).__name__}")
            return []

        try:
            images = [Image.from_dict(record) for record in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._record_corruption(IMAGES_KEY, f"malformed image record: {e}", e)
            return []

        invalid = [image.id for image in images if not image.validate()]
        if invalid:
            self._record_corruption(IMAGES_KEY, f"invalid image records: {invalid}")
            return []

        return images

    def _load_current_user(self) -> str | None:
        data = self._read_json(CURRENT_USER_KEY)
        if data is None:
            return None

        if not isinstance(data, str):
            self._record_corruption(CURRENT_USER_KEY, f"expected a string, got {type(data).__name__}")
            return None

        if data not in self._users:
            self._record_corruption(CURRENT_USER_KEY, "session refers to an unknown user")
            return None

        return data

    # Persisting

    def _save_users(self, users: dict[str, User]) -> None:
        self._kv.save(USERS_KEY, json.dumps({name: user.to_dict() for name, user in users.items()}))

    def _save_images(self, images: list[Image]) -> None:
        self._kv.save(IMAGES_KEY, json.dumps([image.to_dict() for image in images]))

    def _save_current_user(self, username: str | None) -> None:
        self._kv.save(CURRENT_USER_KEY, json.dumps(username))

    # Accounts and session

    def _validate_registration(self, username: str, email: str, password: str) -> None:
        if not username or not username.strip():
            raise ValidationError("Username is required", code="missing_username", user_message="Please fill all fields")
        if not USERNAME_PATTERN.match(username):
            raise ValidationError(
                f"Invalid username '{username}'",
                code="invalid_username",
                user_message="Usernames may contain letters, digits, '.', '_' and '-'",
            )
        if not email or not email.strip():
            raise ValidationError("Email is required", code="missing_email", user_message="Please fill all fields")
        if "@" not in email:
            raise ValidationError("Invalid email address", code="invalid_email", user_message="Please enter a valid email")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "Password too short",
                code="password_too_short",
                user_message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )

    def register(self, username: str, email: str, password: str) -> str:
        """
        Create a new account. Does not log the user in.

        Args:
            username: Unique account name (case-sensitive)
            email: Contact email, unique ignoring case and surrounding spaces
            password: Plaintext password, at least six characters

        Returns:
            str: The registered username

        Raises:
            ValidationError: If any field is missing or malformed
            DuplicateUsernameError: If the username is taken
            DuplicateEmailError: If the email is already registered
            PersistenceError: If the registry cannot be saved
        """
        self._validate_registration(username, email, password)
        email = email.strip()

        with self._lock:
            if username in self._users:
                raise DuplicateUsernameError(username)

            canonical = normalize_email(email)
            if any(normalize_email(user.email) == canonical for user in self._users.values()):
                raise DuplicateEmailError(email)

            user = User.create_new(
                username=username,
                email=email,
                password_digest=self._hasher.hash(password),
                created_at=self._now(),
            )
            users = {**self._users, username: user}
            self._save_users(users)
            self._users = users

        log_user_action(username, "user_registered")
        return username

    def authenticate(self, username: str, password: str) -> str:
        """
        Verify credentials and make ``username`` the current session.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password; session unchanged
            PersistenceError: If the session pointer cannot be saved
        """
        with self._lock:
            user = self._users.get(username)
            if user is None or not self._hasher.verify(password or "", user.password_digest):
                log_security_event("authentication_failure", username=username, user_exists=user is not None)
                raise InvalidCredentialsError(username)

            self._save_current_user(username)
            self._current_user = username

        log_user_action(username, "user_logged_in")
        return username

    def register_and_login(self, username: str, email: str, password: str) -> str:
        """Register a new account and start a session for it."""
        self.register(username, email, password)
        return self.authenticate(username, password)

    def end_session(self) -> None:
        """Clear the session pointer. Safe to call when nobody is logged in."""
        with self._lock:
            previous = self._current_user
            self._save_current_user(None)
            self._current_user = None

        if previous:
            log_user_action(previous, "user_logged_out")

    def current_user(self) -> str | None:
        """Username of the current session, or None when anonymous."""
        return self._current_user

    def get_user(self, username: str) -> User | None:
        """Look up a registered user."""
        return self._users.get(username)

    # Images

    def upload_image(
        self,
        owner: str,
        payload: str | bytes | None,
        title: str,
        description: str | None = "",
    ) -> Image:
        """
        Add an image to the gallery.

        Args:
            owner: Uploading username
            payload: Image data URL, or raw image bytes to encode
            title: Non-empty display title (surrounding whitespace is trimmed)
            description: Optional free text

        Returns:
            Image: The stored record

        Raises:
            ValidationError: If owner or title is empty, or payload is missing or not an image
            PersistenceError: If the image collection cannot be saved
        """
        if not owner:
            raise ValidationError("Image owner is required", code="missing_owner")

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required", code="missing_title", user_message="Please add a title")

        data_url = normalize_payload(payload)

        image = Image.create_new(
            owner=owner,
            payload=data_url,
            title=title,
            description=(description or "").strip(),
            image_id=self._new_id(),
            uploaded_at=self._now(),
        )

        with self._lock:
            images = [*self._images, image]
            self._save_images(images)
            self._images = images

        log_user_action(owner, "image_uploaded", image_id=image.id, title=title, mime_type=image.mime_type)
        return image

    def images_by_owner(self, owner: str) -> list[Image]:
        """Images uploaded by ``owner``, in storage order."""
        return [image for image in self._images if image.owner == owner]

    def all_images(self) -> list[Image]:
        """Every image, in storage order."""
        return list(self._images)

    def get_image(self, image_id: str) -> Image | None:
        """Look up an image by id."""
        return next((image for image in self._images if image.id == image_id), None)

    def featured_images(self, limit: int = 20, rng: random.Random | None = None) -> list[Image]:
        """
        Random selection of images for the landing wall.

        Args:
            limit: Maximum number of images
            rng: Random source, for reproducible tests

        Returns:
            Up to ``limit`` distinct images in random order
        """
        images = self.all_images()
        return (rng or random).sample(images, min(limit, len(images)))  # nosec B311

    def delete_image(self, image_id: str, owner: str) -> DeleteResult:
        """
        Delete an image if ``owner`` uploaded it.

        Returns:
            DeleteResult: DELETED, FORBIDDEN (someone else's image) or NOT_FOUND

        Raises:
            PersistenceError: If the image collection cannot be saved
        """
        with self._lock:
            index = next((i for i, image in enumerate(self._images) if image.id == image_id), None)

            if index is None:
                logger.info("image_delete_not_found", image_id=image_id, username=owner)
                return DeleteResult.NOT_FOUND

            if self._images[index].owner != owner:
                log_security_event("delete_forbidden", username=owner, image_id=image_id)
                return DeleteResult.FORBIDDEN

            images = self._images[:index] + self._images[index + 1 :]
            self._save_images(images)
            self._images = images

        log_user_action(owner, "image_deleted", image_id=image_id)
        return DeleteResult.DELETED

    def delete_image_or_raise(self, image_id: str, owner: str) -> None:
        """
        Delete an image, signalling refusals as exceptions.

        Raises:
            ForbiddenError: If the image belongs to another user
            ImageNotFoundError: If no image has this id
        """
        result = self.delete_image(image_id, owner)
        if result is DeleteResult.FORBIDDEN:
            raise ForbiddenError(image_id, owner)
        if result is DeleteResult.NOT_FOUND:
            raise ImageNotFoundError(image_id)

    def close(self) -> None:
        """Release the persistence medium."""
        self._kv.close()


def create_store(kv_store: KeyValueStore | None = None) -> Store:
    """
    Build a Store over the configured persistence backend.

    Args:
        kv_store: Explicit backend (defaults to ``create_key_value_store()``)

    Returns:
        Store instance with state loaded
    """
    return Store(kv_store or create_key_value_store())
