"""
Runtime validators used at startup.
"""

from __future__ import annotations

import logging

from config.settings import DEFAULT_JWT_SECRET, Settings

logger = logging.getLogger(__name__)


def validate_settings(settings: Settings) -> None:
    """
    Called once at startup.  Refuses to boot a production instance that
    would sign tokens with the built-in fallback secret.
    """
    if settings.jwt_expiry_seconds <= 0:
        raise RuntimeError(
            f"Startup validation failed — JWT_EXPIRY_SECONDS must be positive, "
            f"got {settings.jwt_expiry_seconds}"
        )
    if settings.bcrypt_rounds < 4:
        raise RuntimeError(
            f"Startup validation failed — BCRYPT_ROUNDS must be at least 4, "
            f"got {settings.bcrypt_rounds}"
        )

    if not settings.jwt_secret or settings.jwt_secret == DEFAULT_JWT_SECRET:
        if settings.is_production:
            raise RuntimeError(
                "Startup validation failed — JWT_SECRET is unset but "
                "ENVIRONMENT=production"
            )
        logger.warning(
            "JWT_SECRET is not configured; signing tokens with the fallback "
            "secret (environment=%s)",
            settings.environment,
        )

    logger.info("Settings validated (environment=%s)", settings.environment)
