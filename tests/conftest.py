"""
Pytest configuration and fixtures for showcase tests.
"""

import io
import tempfile
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from PIL import Image as PILImage

from showcase.config import get_config
from showcase.models.image import Image
from showcase.models.user import User
from showcase.services.image_payload import encode_image_bytes
from showcase.services.passwords import PasswordHasher
from showcase.services.persistence import InMemoryKeyValueStore
from showcase.services.store import Store

# bcrypt's minimum cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SHOWCASE_BCRYPT_ROUNDS", str(TEST_BCRYPT_ROUNDS))
    monkeypatch.setenv("SHOWCASE_STORE_BACKEND", "memory")
    get_config().clear_cache()
    yield
    get_config().clear_cache()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_image_data() -> bytes:
    """Provide a small PNG for testing."""
    return TestDataFactory.create_png_bytes()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Fast bcrypt hasher."""
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Empty in-memory persistence medium."""
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv_store: InMemoryKeyValueStore, password_hasher: PasswordHasher) -> Store:
    """Store over an empty in-memory medium."""
    return Store(kv_store, password_hasher=password_hasher)


class TestDataFactory:
    """Factory class for creating test data objects."""

    __test__ = False

    @staticmethod
    def create_png_bytes(color: str = "red", size: tuple[int, int] = (4, 4), image_format: str = "PNG") -> bytes:
        """Render a solid-colour image and return its encoded bytes.

        Args:
            color: Fill colour
            size: Width and height in pixels
            image_format: Pillow format name

        Returns:
            Encoded image bytes
        """
        buffer = io.BytesIO()
        PILImage.new("RGB", size, color).save(buffer, format=image_format)
        return buffer.getvalue()

    @staticmethod
    def create_data_url(color: str = "red") -> str:
        """Create an image data URL for testing."""
        return encode_image_bytes(TestDataFactory.create_png_bytes(color))

    @staticmethod
    def create_user(
        username: str = "alice",
        email: str = "a@x.com",
        password_digest: str = "$2b$04$notarealdigestnotarealdigestnotarealdigestnotareal",
        created_at: datetime | None = None,
    ) -> User:
        """Create a User object for testing."""
        return User(
            username=username,
            email=email,
            password_digest=password_digest,
            created_at=created_at or datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
        )

    @staticmethod
    def create_image(
        image_id: str = "image-1",
        owner: str = "alice",
        title: str = "Sunset",
        description: str = "",
        uploaded_at: datetime | None = None,
        payload: str | None = None,
    ) -> Image:
        """Create an Image object for testing."""
        return Image(
            id=image_id,
            owner=owner,
            payload=payload or TestDataFactory.create_data_url(),
            title=title,
            description=description,
            uploaded_at=uploaded_at or datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
        )

    @staticmethod
    def create_images(owner: str = "alice", count: int = 3) -> list[Image]:
        """Create ``count`` images uploaded one minute apart, oldest first."""
        start = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        return [
            TestDataFactory.create_image(
                image_id=f"{owner}-{i}",
                owner=owner,
                title=f"Artwork {i}",
                uploaded_at=start + timedelta(minutes=i),
            )
            for i in range(count)
        ]
