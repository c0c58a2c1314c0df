"""Package-wide logging configuration."""

from __future__ import annotations

import logging
import sys

_ROOT = "importantcuts"

# Set once the package logger owns its handler
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.WARNING,
    format_string: str | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """Set up the package logger with a single handler.

    Calling it again is a no-op until `reset_logging` is called.

    Parameters
    ----------
    level : `int`
        Logging level.
    format_string : `str`
        Custom format string.
    handler : `logging.Handler`
        Custom handler.
        Defaults to a `logging.StreamHandler` on `sys.stderr`.
    """
    global _ROOT_LOGGER_CONFIGURED  # noqa: PLW0603

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(_ROOT)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Propagate so that pytest can capture records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger inheriting the package configuration.

    Parameters
    ----------
    name : `str`
        Logger name, typically ``__name__``.

    Returns
    -------
    `logging.Logger`
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of every package logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(_ROOT)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Log engine internals."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Back to warnings only."""
    set_global_log_level(logging.WARNING)


def reset_logging() -> None:
    """Drop the package handler (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED  # noqa: PLW0603
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(_ROOT)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
