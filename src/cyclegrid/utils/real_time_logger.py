"""Lightweight logging shim for turn-time observability.

Stdout carries the move protocol, so every record goes to stderr.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_LOGGER: Optional[logging.Logger] = None

LOG_LEVEL_ENV = "CYCLEGRID_LOG_LEVEL"


def get_logger() -> logging.Logger:
    """Return the package logger configured for stderr output."""

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger("cyclegrid")
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            _LOGGER.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        _LOGGER.setLevel(getattr(logging, level_name, logging.INFO))
    return _LOGGER


def set_level(level: str) -> None:
    """Override the logger level, e.g. from a ``--verbose`` CLI flag."""

    get_logger().setLevel(getattr(logging, level.upper(), logging.INFO))
