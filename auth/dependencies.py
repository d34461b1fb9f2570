"""
FastAPI dependencies for authentication.

``get_request_context`` is the guard in front of every catalog route: it
verifies the bearer token and hands the handler an explicit
``RequestContext`` instead of stashing the user on shared state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import verify_token
from utils.errors import AuthenticationError

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Per-request identity, built once the bearer token checks out."""

    user_id: str


async def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> RequestContext:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``RequestContext``.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing Bearer token")

    return RequestContext(user_id=verify_token(credentials.credentials))
