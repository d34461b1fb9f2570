"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

import pydantic
from fastapi import Depends, Query
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from database.queries import BookListQuery
from database.session import get_db_session


async def db_session(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    """Re-export so routes import from a single place."""
    yield session


def book_list_query(
    author: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    rating: Optional[str] = Query(None),
    title: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
) -> BookListQuery:
    """
    Collect the listing query-string into a ``BookListQuery``.

    Bounds and allowed values live on the model; its errors are re-raised
    as request validation errors so they share the 400 response shape.
    """
    raw = {
        "author": author,
        "category": category,
        "rating": rating,
        "title": title,
        "page": page,
        "limit": limit,
        "sortBy": sort_by,
        "sortOrder": sort_order,
    }
    try:
        return BookListQuery.model_validate({k: v for k, v in raw.items() if v is not None})
    except pydantic.ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("query", *err["loc"])} for err in exc.errors()]
        )
