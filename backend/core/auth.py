from __future__ import annotations

import logging
import os
import secrets

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "admin123"


def admin_password() -> str:
    configured = os.getenv("ADMIN_PASSWORD")
    if configured:
        return configured
    return DEFAULT_ADMIN_PASSWORD


def warn_if_default_password() -> None:
    if not os.getenv("ADMIN_PASSWORD"):
        logger.warning("ADMIN_PASSWORD is not set; uploads accept the built-in default password")


def verify_admin_secret(candidate: str | None) -> bool:
    if not candidate:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), admin_password().encode("utf-8"))
