"""Centralized logging configuration for wgraph.

All package modules obtain loggers through `get_logger(__name__)`; they
inherit level and handler from the single ``wgraph`` root logger configured
here. The initial level comes from the ``WGRAPH_LOG_LEVEL`` environment
variable (a level name such as ``DEBUG``) and defaults to INFO.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "wgraph"
LOG_LEVEL_ENV = "WGRAPH_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Flag to track if we've already set up the root logger
_ROOT_LOGGER_CONFIGURED = False


def level_from_env(default: int = logging.INFO) -> int:
    """Resolve the initial log level from ``WGRAPH_LOG_LEVEL``.

    Unknown names fall back to `default`.
    """
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the ``wgraph`` root logger with a single handler.

    Repeated calls are no-ops until `reset_logging` is called.

    Args:
        level: Logging level; defaults to `level_from_env()`.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level_from_env() if level is None else level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Let logs propagate so pytest's caplog can capture them
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``wgraph`` hierarchy.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger inheriting level and handler from the package root logger.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all wgraph loggers and the root handler."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Log algorithm iterations (augmenting paths, min-cuts)."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Forget the root configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
