"""
Centralized logging configuration for the showcase application.

Sets up structlog on top of the standard library logging module so every
component emits the same structured events: a console renderer while
developing and JSON lines in production.
"""

import logging
import os
import sys
from typing import Any

import structlog


def get_log_level() -> int:
    """
    Get log level from the LOG_LEVEL environment variable.

    Returns:
        int: Log level constant from logging module (INFO when unset or unknown)
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    level_mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    return level_mapping.get(level_name, logging.INFO)


def is_development_environment() -> bool:
    """Check if running in development environment."""
    return os.getenv("ENVIRONMENT", "development").lower() in ["development", "dev", "local", "test"]


def configure_structured_logging() -> None:
    """
    Configure structured logging for the entire application.

    Safe to call more than once; Streamlit re-executes the main script on
    every interaction.
    """
    log_level = get_log_level()
    is_dev = is_development_environment()
    use_colors = is_dev and sys.stderr.isatty()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",  # structlog will handle formatting
        stream=sys.stderr,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=use_colors))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    logger = structlog.get_logger("showcase.logging")
    logger.debug(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        environment="development" if is_dev else "production",
        colors_enabled=use_colors,
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, usually ``__name__`` of the calling module

    Returns:
        structlog.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name or "showcase")


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """
    Log performance metrics.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **context: Additional context information
    """
    logger = get_logger("showcase.performance")
    logger.info("performance_metric", operation=operation, duration_seconds=duration, **context)


def log_user_action(username: str, action: str, **context: Any) -> None:
    """
    Log user actions for audit trail.

    Args:
        username: Acting user
        action: Action performed
        **context: Additional context information
    """
    logger = get_logger("showcase.user_actions")
    logger.info("user_action", username=username, action=action, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """
    Log errors with structured context.

    Args:
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger("showcase.errors")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(context)

    logger.error("error_occurred", **error_context)


def log_security_event(event_type: str, username: str | None = None, **context: Any) -> None:
    """
    Log security-related events such as failed logins or forbidden deletes.

    Args:
        event_type: Type of security event
        username: User involved (if known)
        **context: Additional context information
    """
    logger = get_logger("showcase.security")
    logger.warning("security_event", event_type=event_type, username=username, **context)
