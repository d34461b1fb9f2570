"""
Credential store: user creation and lookup.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.password import hash_password, verify_password
from database.models import User
from utils.errors import AuthenticationError, DuplicateResourceError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, email: str, password: str) -> User:
    """
    Insert a user with a freshly salted password hash.

    The unique index on ``users.email`` is the source of truth for
    duplicates; its violation surfaces as ``DuplicateResourceError``.
    """
    user = User(email=normalize_email(email), password_hash=hash_password(password))
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise DuplicateResourceError("Email already in use")
    logger.debug("Created user %s", user.id)
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User:
    """Return the user for valid credentials; unknown email and bad password look the same."""
    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user
