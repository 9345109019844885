"""Key-value persistence backends for the showcase Store.

The Store only ever needs "load the value stored under a key" and "replace the
value stored under a key". Values are JSON text; encoding and decoding is the
Store's job.
"""

from abc import ABC, abstractmethod
from typing import Any

import duckdb

from ..config import get_db_path, get_store_backend
from ..error_handling import PersistenceError
from ..logging_config import get_logger
from ..models.database import DatabaseManager, get_database_manager
from ..models.schema import KV_TABLE_NAME

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Durable mapping from string keys to string values."""

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> "KeyValueStore":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of every stored value."""
        return dict(self._values)


class DuckDBKeyValueStore(KeyValueStore):
    """Key-value store persisted as rows of a DuckDB table."""

    def __init__(self, db_path: str, db_manager: DatabaseManager | None = None) -> None:
        """
        Open (and create if needed) the database at ``db_path``.

        Args:
            db_path: DuckDB file path, or ``:memory:``
            db_manager: Pre-built manager, mainly for tests

        Raises:
            PersistenceError: If the database cannot be opened or initialized
        """
        self.db_path = db_path
        try:
            self._db = db_manager or get_database_manager(db_path)
        except (RuntimeError, OSError, duckdb.Error) as e:
            raise PersistenceError(f"Failed to open key-value database: {e}", original_exception=e) from e

        logger.info("duckdb_kv_store_opened", db_path=db_path)

    def load(self, key: str) -> str | None:
        try:
            rows = self._db.execute_query(f"SELECT value FROM {KV_TABLE_NAME} WHERE key = ?", (key,))  # nosec B608
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to load '{key}': {e}", key=key, original_exception=e) from e

        return rows[0][0] if rows else None

    def save(self, key: str, value: str) -> None:
        try:
            self._db.connect().execute(
                f"""INSERT INTO {KV_TABLE_NAME} (key, value, updated_at)
                    VALUES (?, ?, current_timestamp)
                    ON CONFLICT (key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",  # nosec B608
                (key, value),
            )
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to save '{key}': {e}", key=key, original_exception=e) from e

        logger.debug("kv_value_saved", key=key, size=len(value))

    def delete(self, key: str) -> None:
        try:
            self._db.connect().execute(f"DELETE FROM {KV_TABLE_NAME} WHERE key = ?", (key,))  # nosec B608
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to delete '{key}': {e}", key=key, original_exception=e) from e

    def close(self) -> None:
        self._db.close()


def create_key_value_store(backend: str | None = None, db_path: str | None = None) -> KeyValueStore:
    """
    Build the configured key-value backend.

    Args:
        backend: ``duckdb`` or ``memory`` (defaults to SHOWCASE_STORE_BACKEND)
        db_path: DuckDB file path (defaults to SHOWCASE_DB_PATH)

    Returns:
        KeyValueStore instance
    """
    backend = backend or get_store_backend()

    if backend == "memory":
        logger.info("kv_store_selected", backend="memory")
        return InMemoryKeyValueStore()

    path = db_path or get_db_path()
    logger.info("kv_store_selected", backend="duckdb", db_path=path)
    return DuckDBKeyValueStore(path)
