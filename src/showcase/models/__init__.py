"""
Models module for the showcase application.

This module contains data models and schemas:
- User: Data class for a registered account
- Image: Data class for an uploaded image
- DatabaseManager: DuckDB connection and key-value schema management
"""

from .database import DatabaseManager, get_database_manager
from .image import Image, sort_by_recency
from .schema import get_schema_statements
from .user import User

__all__ = [
    "User",
    "Image",
    "sort_by_recency",
    "DatabaseManager",
    "get_database_manager",
    "get_schema_statements",
]
