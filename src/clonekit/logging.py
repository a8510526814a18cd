"""Logging setup for clonekit.

All modules use:
    from clonekit.logging import get_logger
    logger = get_logger(__name__)

The package logger carries a NullHandler, so a library user sees nothing
unless they configure logging. `configure_logging` is an opt-in helper for
scripts and examples.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "clonekit"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO = sys.stderr,
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Safe to call multiple times; handler duplication is prevented.

    Args:
        level: Level for the package logger.
        fmt: Format string for the handler.
        stream: Stream the handler writes to.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Example:
        logger = get_logger(__name__)

    Do NOT configure logging here; configuration happens in configure_logging().
    """
    return logging.getLogger(name)
