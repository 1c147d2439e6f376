"""loguru helpers shared by the configuration engine.

The package logs through loguru but stays silent until
:func:`configure_logging` (or ``logger.enable("config_loadr")``) is called, so
that importing applications keep control of their own handlers.
"""
from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from loguru import logger

PACKAGE_NAME = "config_loadr"
SECRET_TOKENS = ("password", "secret", "token", "key")
MASK = "***masked***"

logger.disable(PACKAGE_NAME)


def is_secret(key: str) -> bool:
    lowered = key.lower()
    return any(token in lowered for token in SECRET_TOKENS)


def mask(key: str, value: Optional[str]) -> Optional[str]:
    """Hide ``value`` when ``key`` looks like it holds a credential."""

    if value is None or not is_secret(key):
        return value
    return MASK


def get_logger(module_name: str) -> Any:
    """Return the package logger bound to ``module_name``."""

    return logger.bind(module=module_name)


def configure_logging(level: str = "WARNING", sink: Optional[TextIO] = None) -> int:
    """Route package logs to ``sink`` (stderr by default) at ``level``.

    Returns the loguru handler id so callers can remove it again.
    """

    logger.enable(PACKAGE_NAME)
    return logger.add(
        sink or sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]} | {message}",
        filter=lambda record: (record["name"] or "").startswith(PACKAGE_NAME)
        and "module" in record["extra"],
        colorize=False,
    )


__all__ = ["configure_logging", "get_logger", "is_secret", "mask"]
