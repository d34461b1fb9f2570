"""
Shared fixtures: an in-memory SQLite store and an HTTP client bound to the app.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import config
from database.models import Base
from database.session import get_db_session
from main import app


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt's production work factor makes the suite crawl."""
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(client) -> dict:
    resp = await client.post(
        "/api/auth/signup",
        json={"email": "reader@example.com", "password": "password123"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def book_payload():
    """Factory for a valid POST /api/books body (camelCase, as sent over HTTP)."""

    def _make(**overrides) -> dict:
        data = {
            "title": "The Pragmatic Programmer",
            "author": "Andrew Hunt",
            "category": "Software",
            "price": 39.5,
            "rating": 4.5,
            "publishedDate": "1999-10-20T00:00:00Z",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def book_data():
    """Factory for store-level book fields (snake_case, typed)."""

    def _make(**overrides) -> dict:
        data = {
            "title": "The Pragmatic Programmer",
            "author": "Andrew Hunt",
            "category": "Software",
            "price": 39.5,
            "rating": 4.5,
            "published_date": datetime(1999, 10, 20, tzinfo=timezone.utc),
        }
        data.update(overrides)
        return data

    return _make
