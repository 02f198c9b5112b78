"""Logging configuration for the blog engine.

Every module asks for its own named logger through ``setup_logging``;
the CLI's ``--verbose`` flag lowers all of them to DEBUG via ``set_level``.
``LOG_LEVEL`` in the environment sets the starting level.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured: set[str] = set()


def default_level() -> int:
    """Level from ``LOG_LEVEL`` (name or number), INFO when unset or unknown."""
    value = os.getenv("LOG_LEVEL", "").strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value) if value else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    level: Optional[int] = None,
    module_name: str = "reduction",
) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use.

    Args:
        level: Logging level (default from LOG_LEVEL, else INFO).
        module_name: Name for the logger instance, e.g. "publisher.builder".
    """
    logger = logging.getLogger(module_name)
    if logger.handlers:
        return logger

    level = default_level() if level is None else level
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    _configured.add(module_name)

    _apply(logger, level)
    return logger


def set_level(level: int) -> None:
    """Change the level of every logger created by setup_logging."""
    for name in _configured:
        _apply(logging.getLogger(name), level)


def _apply(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
