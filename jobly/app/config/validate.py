"""Startup configuration validation utilities."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from config import DEFAULT_SECRET_KEY, AppEnv, Settings, get_settings

logger = logging.getLogger("jobly.config")


def _mask(value: str) -> str:
    """Return a masked representation of ``value`` for logging."""
    if len(value) <= 4:
        return "*" * len(value)
    return value[:2] + "*" * (len(value) - 4) + value[-2:]


def validate_on_boot(settings: Settings | None = None) -> Settings:
    """Validate the merged settings before the application starts.

    Logs masked values for audit and raises :class:`RuntimeError` when a
    setting is malformed. Production additionally refuses the development
    secret key and short keys.
    """

    settings = settings or get_settings()

    parsed = urlparse(settings.database_url)
    if not parsed.scheme:
        raise RuntimeError("DATABASE_URL must be a valid URL")

    if settings.app_env is AppEnv.PROD:
        if settings.secret_key == DEFAULT_SECRET_KEY:
            raise RuntimeError("SECRET_KEY must be set in prod")
        if len(settings.secret_key) < 32:
            raise RuntimeError("SECRET_KEY must be at least 32 characters long")
        if parsed.scheme.startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must not point at SQLite in prod")

    if settings.access_token_expire_minutes <= 0:
        raise RuntimeError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

    logger.info("APP_ENV=%s", settings.app_env.value)
    logger.info("DATABASE_URL=%s", f"{parsed.scheme}://***")
    logger.info("SECRET_KEY=%s", _mask(settings.secret_key))
    return settings
