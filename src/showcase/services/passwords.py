"""Password hashing for showcase accounts.

Digests are bcrypt hashes: salted, one-way, and checked in constant time by
``bcrypt.checkpw``.
"""

import bcrypt

from ..config import get_bcrypt_rounds
from ..logging_config import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hash and verify passwords with bcrypt."""

    def __init__(self, rounds: int | None = None) -> None:
        """
        Args:
            rounds: bcrypt cost factor (defaults to SHOWCASE_BCRYPT_ROUNDS)
        """
        self.rounds = rounds or get_bcrypt_rounds()

    def _encode(self, password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Args:
            password: Plaintext password

        Returns:
            str: bcrypt digest (``$2b$...``), salt and cost included
        """
        digest = bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("ascii")

    def verify(self, password: str, digest: str) -> bool:
        """
        Check a password against a stored digest.

        Returns:
            bool: True if the password matches; False for a mismatch or an unreadable digest
        """
        try:
            return bcrypt.checkpw(self._encode(password), digest.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as e:
            logger.warning("password_digest_unreadable", error=str(e))
            return False
