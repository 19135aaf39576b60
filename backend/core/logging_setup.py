"""Logging for the dashboard API and the Telegram bot.

Both entrypoints call :func:`configure_logging` at startup; everything under
``backend.*`` then goes to one stderr handler whose level comes from
``DASHBOARD_LOG_LEVEL``.
"""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def resolve_level(value: str | None) -> int:
    """Map ``"debug"``, ``"WARNING"`` or ``"10"`` to a level; anything else is INFO."""

    if not value:
        return logging.INFO
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("backend")
    logger.setLevel(resolve_level(os.getenv("DASHBOARD_LOG_LEVEL")))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
