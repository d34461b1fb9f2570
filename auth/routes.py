"""
Auth API routes — signup, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session
from auth.jwt import create_token
from database.users import authenticate_user, create_user
from utils.errors import InternalError
from utils.schemas import AuthResponse, LoginRequest, SignupRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user and return a token for it."""
    try:
        user = await create_user(session, req.email, req.password)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Signup failed for %s", req.email)
        raise InternalError("Error creating user")

    token = create_token(str(user.id))
    logger.info("Registered user %s", user.id)

    return {"user": {"email": user.email}, "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        user = await authenticate_user(session, req.email, req.password)
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        raise InternalError("Error logging in")

    token = create_token(str(user.id))
    logger.info("Login: %s", user.id)

    return {"user": {"email": user.email}, "token": token}
