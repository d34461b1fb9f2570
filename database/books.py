"""
Catalog store: CRUD and filtered listing of books.

Every write is a single-row statement; concurrent updates to the same
book are last-write-wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Book
from database.queries import BookListQuery, build_list_statements
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ("title", "author", "category", "price", "rating", "published_date")


def _parse_id(book_id: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(book_id, uuid.UUID):
        return book_id
    try:
        return uuid.UUID(book_id)
    except (ValueError, TypeError, AttributeError):
        return None


async def create_book(session: AsyncSession, data: Dict[str, Any]) -> Book:
    book = Book(**{k: v for k, v in data.items() if k in _MUTABLE_FIELDS})
    session.add(book)
    await session.flush()
    logger.debug("Created book %s", book.id)
    return book


async def get_book(session: AsyncSession, book_id: str | uuid.UUID) -> Book:
    """Return the book or raise ``NotFoundError`` (malformed ids included)."""
    uid = _parse_id(book_id)
    book = await session.get(Book, uid) if uid is not None else None
    if book is None:
        raise NotFoundError("Book")
    return book


async def update_book(
    session: AsyncSession,
    book_id: str | uuid.UUID,
    changes: Dict[str, Any],
) -> Book:
    """Apply only the supplied fields and return the post-update record."""
    book = await get_book(session, book_id)
    applied = {k: v for k, v in changes.items() if k in _MUTABLE_FIELDS}
    for field, value in applied.items():
        setattr(book, field, value)
    if applied:
        await session.flush()
    logger.debug("Updated book %s fields=%s", book.id, sorted(applied))
    return book


async def delete_book(session: AsyncSession, book_id: str | uuid.UUID) -> None:
    book = await get_book(session, book_id)
    await session.delete(book)
    await session.flush()
    logger.debug("Deleted book %s", book.id)


async def list_books(session: AsyncSession, query: BookListQuery) -> Tuple[List[Book], int]:
    """Return one page of matching books plus the total match count."""
    page_stmt, count_stmt = build_list_statements(query)
    books = list((await session.execute(page_stmt)).scalars().all())
    total = (await session.execute(count_stmt)).scalar_one()
    return books, total
