"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for tagmatch, including
structured logging with Loguru and an error handling decorator for external
API calls.

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log system configuration at startup

@resilient_operation(operation_name: str)
    Decorator for handling errors in external API calls
    Usage: @resilient_operation("spotify_search")
"""

import functools
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# Secrets never written to logs
_REDACTED_KEYS = frozenset({"spotify_client_secret"})

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console format is colorized and simplified
        - File format is serialized JSON with full structured information
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # Add contextual info to all log records
    logger.configure(extra={"service": "tagmatch", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {process}:{thread} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=False,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module context

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Batch complete", outcome_count=12)
        ```
    """
    return logger.bind(
        module=name,
        service="tagmatch",
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log application configuration on startup.

    Logs every configuration section at debug level with credentials redacted.
    """
    local_logger = get_logger(__name__)

    local_logger.debug("Configuration:")
    for section_name, section_values in settings.model_dump().items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if key in _REDACTED_KEYS and value:
                    value = "********"
                elif isinstance(value, Path):
                    value = str(value)
                local_logger.debug("    {}: {}", key.upper(), value)
        else:
            local_logger.debug("    {}", section_values)


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


def resilient_operation(operation_name=None):
    """Decorator for service boundary operations with standardized error handling.

    Use on external API calls and other boundary operations so failures are
    logged once, with context, before propagating to the caller.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Returns:
        Decorated coroutine function with error logging

    Example:
        >>> @resilient_operation("spotify_search")
        >>> async def search(artist, title):
        >>>     return await client.search(artist, title)
    """

    def decorator(func):
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.opt(exception=e).warning(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator
