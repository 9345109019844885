"""
Services module for the showcase application.

This module contains the classes that hold the business logic:
- Store: users, images and the session pointer over a key-value backend
- KeyValueStore: persistence backends (DuckDB, in-memory)
- PasswordHasher: bcrypt password hashing
- Image payload helpers: Pillow-checked data URL encoding
"""

from .image_payload import decode_data_url, encode_image_bytes, normalize_payload
from .passwords import PasswordHasher
from .persistence import DuckDBKeyValueStore, InMemoryKeyValueStore, KeyValueStore, create_key_value_store
from .store import DeleteResult, Store, create_store

__all__ = [
    "Store",
    "DeleteResult",
    "create_store",
    "KeyValueStore",
    "DuckDBKeyValueStore",
    "InMemoryKeyValueStore",
    "create_key_value_store",
    "PasswordHasher",
    "encode_image_bytes",
    "decode_data_url",
    "normalize_payload",
]
