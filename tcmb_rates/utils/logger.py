"""Logging utilities for the tcmb_rates package."""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "tcmb_rates"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONSOLE_HANDLER: Optional[logging.Handler] = None

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return a logger below the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def enable_console_logging(level: int = logging.INFO) -> logging.Logger:
    """Print package log records to stderr; repeated calls only adjust ``level``."""
    global _CONSOLE_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _CONSOLE_HANDLER is None:
        _CONSOLE_HANDLER = logging.StreamHandler()
        _CONSOLE_HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_CONSOLE_HANDLER)
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FORMAT", "enable_console_logging", "get_logger"]
