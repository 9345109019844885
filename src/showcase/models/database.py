"""
Database initialization and management for the showcase application.

This module owns the DuckDB connection behind the durable key-value store
and creates the ``kv_store`` table on first use.
"""

from pathlib import Path
from typing import Any

import duckdb

from ..logging_config import get_logger
from .schema import KV_TABLE_NAME, REQUIRED_COLUMNS, get_schema_statements

logger = get_logger(__name__)

IN_MEMORY_DB = ":memory:"


class DatabaseManager:
    """
    Manages a DuckDB database connection and its schema.
    """

    def __init__(self, db_path: str):
        """
        Initialize DatabaseManager.

        Args:
            db_path: Path to the DuckDB database file, or ``:memory:``
        """
        self.db_path = db_path
        self._connection: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Get or create a database connection.

        Returns:
            DuckDB connection object
        """
        if self._connection is None:
            self._connection = duckdb.connect(self.db_path)
            logger.info("database_connected", db_path=self.db_path)

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("database_closed", db_path=self.db_path)

    def initialize_schema(self) -> None:
        """
        Create the key-value table if it doesn't exist.

        Raises:
            RuntimeError: If an existing table lacks required columns
            duckdb.Error: If database operations fail
        """
        conn = self.connect()

        try:
            for statement in get_schema_statements():
                logger.debug("executing_schema_statement", statement=statement.strip())
                conn.execute(statement)

        except duckdb.Error as e:
            logger.error("database_schema_initialization_failed", db_path=self.db_path, error=str(e))
            raise

        if not self.verify_schema():
            raise RuntimeError(f"Existing {KV_TABLE_NAME} table is not compatible with the key-value store")

        logger.info("database_schema_initialized", db_path=self.db_path)

    def verify_schema(self) -> bool:
        """
        Verify that the key-value table exists with every required column.

        Returns:
            True if schema is valid, False otherwise
        """
        conn = self.connect()

        try:
            columns = conn.execute(
                "SELECT column_name FROM information_schema.columns WHERE table_name = ?",
                (KV_TABLE_NAME,),
            ).fetchall()

            if not columns:
                logger.warning("kv_table_missing", table=KV_TABLE_NAME)
                return False

            missing_columns = REQUIRED_COLUMNS - {col[0] for col in columns}
            if missing_columns:
                logger.warning("kv_table_missing_columns", missing=sorted(missing_columns))
                return False

            return True

        except duckdb.Error as e:
            logger.error("schema_verification_failed", error=str(e))
            return False

    def execute_query(self, query: str, parameters: tuple | None = None) -> list[tuple]:
        """
        Execute a SQL query and return results.

        Args:
            query: SQL query string
            parameters: Optional query parameters

        Returns:
            List of result tuples

        Raises:
            duckdb.Error: If query execution fails
        """
        conn = self.connect()

        try:
            if parameters:
                result = conn.execute(query, parameters)
            else:
                result = conn.execute(query)

            return result.fetchall()

        except duckdb.Error as e:
            logger.error("query_execution_failed", query=query.strip(), error=str(e))
            raise

    def __enter__(self) -> "DatabaseManager":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()


def get_database_manager(db_path: str) -> DatabaseManager:
    """
    Get a DatabaseManager with a ready schema, creating the file if needed.

    Args:
        db_path: Path to the database file, or ``:memory:``

    Returns:
        DatabaseManager instance

    Raises:
        RuntimeError: If the schema cannot be created
    """
    if db_path != IN_MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    db_manager = DatabaseManager(db_path)

    try:
        if not db_manager.verify_schema():
            db_manager.initialize_schema()
    except duckdb.Error as e:
        db_manager.close()
        raise RuntimeError(f"Database initialization failed: {e}") from e
    except RuntimeError:
        db_manager.close()
        raise

    return db_manager
