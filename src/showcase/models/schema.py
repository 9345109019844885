"""
Database schema definitions for the showcase key-value table.

The gallery persists three JSON values (users, images, current session) as
rows of a single key-value table.
"""

KV_TABLE_NAME = "kv_store"

KV_TABLE_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {KV_TABLE_NAME} (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

REQUIRED_COLUMNS = {"key", "value", "updated_at"}

ALL_SCHEMA_STATEMENTS = [KV_TABLE_SCHEMA]


def get_schema_statements() -> list[str]:
    """
    Get all database schema creation statements.

    Returns:
        List of SQL statements to create tables
    """
    return ALL_SCHEMA_STATEMENTS

