"""Configuration management for the showcase application.

Values come from environment variables with Streamlit secrets as a fallback,
so the same code runs under ``streamlit run``, the batch CLI and the tests.
"""

import os
from typing import Any

try:
    import streamlit as st

    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DB_PATH = "data/showcase.duckdb"
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_FEATURED_LIMIT = 20
STORE_BACKENDS = ("duckdb", "memory")


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        if value is None and STREAMLIT_AVAILABLE:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets.toml, or not running inside Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")  # type: ignore[assignment]
                    else:
                        value = bool(value)  # type: ignore[assignment]
                elif cast_type is not str:
                    value = cast_type(value)
            except (ValueError, TypeError) as e:
                logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, error=str(e))
                value = default

        self._cache[cache_key] = value
        return value

    def get_required(self, key: str, cast_type: type = str) -> Any:
        """Get required configuration value.

        Raises:
            ValueError: If the required configuration is not found
        """
        value = self.get(key, cast_type=cast_type)
        if value is None:
            raise ValueError(f"Required configuration '{key}' not found")
        return value

    def is_development(self) -> bool:
        """Check if running in development mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["development", "dev", "local", "test"]

    def is_production(self) -> bool:
        """Check if running in production mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["production", "prod"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get a configuration value through the global instance."""
    return get_config().get(key, default, cast_type)


def is_development() -> bool:
    """Check if running in development mode."""
    return get_config().is_development()


def get_environment() -> str:
    """Get current environment."""
    return str(get_env("ENVIRONMENT", "development"))


def get_debug_mode() -> bool:
    """Get debug mode setting."""
    return get_env("DEBUG", False, bool) or is_development()


def get_store_backend() -> str:
    """Get the key-value backend name (``duckdb`` or ``memory``)."""
    backend = str(get_env("SHOWCASE_STORE_BACKEND", "duckdb")).lower().strip()
    if backend not in STORE_BACKENDS:
        logger.warning("unknown_store_backend", backend=backend, fallback="duckdb")
        return "duckdb"
    return backend


def get_db_path() -> str:
    """Get the DuckDB file holding the persisted gallery state."""
    return str(get_env("SHOWCASE_DB_PATH", DEFAULT_DB_PATH))


def get_bcrypt_rounds() -> int:
    """Get the bcrypt cost factor (bcrypt accepts 4-31)."""
    rounds = int(get_env("SHOWCASE_BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS, int))
    return max(4, min(31, rounds))


def get_max_upload_bytes() -> int:
    """Get the maximum accepted size of a raw image upload."""
    return int(get_env("SHOWCASE_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES, int))


def get_featured_limit() -> int:
    """Get how many images the landing wall shows."""
    return int(get_env("SHOWCASE_FEATURED_LIMIT", DEFAULT_FEATURED_LIMIT, int))
