"""
Async SQLAlchemy engine and session factory.

The engine is built lazily by ``init_engine`` (called from the app's
startup hook) so importing the application never opens a connection.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from database.models import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def init_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the engine and session factory for ``database_url``."""
    global _engine, _session_factory

    kwargs = {}
    if not database_url.startswith("sqlite"):
        kwargs.update(pool_size=10, max_overflow=20, pool_recycle=3600)

    _engine = create_async_engine(database_url, echo=echo, pool_pre_ping=True, **kwargs)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Database engine initialised (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine


async def create_tables() -> None:
    """Create tables and indexes that do not exist yet."""
    if _engine is None:
        raise RuntimeError("Database not initialised. Call init_engine first.")
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    if _session_factory is None:
        raise RuntimeError("Database not initialised. Call init_engine first.")
    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
