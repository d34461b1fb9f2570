"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying the user id in ``sub`` and a fixed
expiry.  Secret and algorithm are loaded from ``config`` (env vars
``JWT_SECRET`` / ``JWT_ALGORITHM``) on every call so they stay stable
across restarts and can be overridden in tests.
"""

from __future__ import annotations

import logging
import time

from jose import ExpiredSignatureError, JWTError, jwt

from config.settings import config
from utils.errors import AuthenticationError

logger = logging.getLogger(__name__)


def create_token(user_id: str) -> str:
    """Create a signed token containing ``user_id`` and expiry."""
    now = int(time.time())
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + config.jwt_expiry_seconds,
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def verify_token(token: str) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``AuthenticationError`` on invalid or expired tokens.
    """
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise AuthenticationError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token")
    return str(user_id)
