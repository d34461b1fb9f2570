"""
Book catalog routes.  Every route sits behind the bearer-token guard.

Route prefix: /api/books
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import book_list_query, db_session
from auth.dependencies import RequestContext, get_request_context
from database import books as store
from database.queries import BookListQuery, page_count
from utils.errors import InternalError
from utils.schemas import (
    BookCreate,
    BookListResponse,
    BookOut,
    BookUpdate,
    MessageResponse,
    Pagination,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["books"])


@router.post("", response_model=BookOut, status_code=status.HTTP_201_CREATED)
async def create_book(
    ctx: RequestContext = Depends(get_request_context),
    payload: BookCreate = Body(...),
    session: AsyncSession = Depends(db_session),
) -> BookOut:
    try:
        book = await store.create_book(session, payload.model_dump())
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error creating book (user=%s)", ctx.user_id)
        raise InternalError("Error creating book")

    logger.info("Book %s created by %s", book.id, ctx.user_id)
    return BookOut.model_validate(book)


@router.get("", response_model=BookListResponse)
async def list_books(
    ctx: RequestContext = Depends(get_request_context),
    query: BookListQuery = Depends(book_list_query),
    session: AsyncSession = Depends(db_session),
) -> BookListResponse:
    """Filtered, sorted, paginated listing."""
    try:
        books, total = await store.list_books(session, query)
    except SQLAlchemyError:
        logger.exception("Error fetching books (user=%s)", ctx.user_id)
        raise InternalError("Error fetching books")

    return BookListResponse(
        books=[BookOut.model_validate(b) for b in books],
        pagination=Pagination(
            total=total,
            page=query.page,
            limit=query.limit,
            pages=page_count(total, query.limit),
        ),
    )


@router.get("/{book_id}", response_model=BookOut)
async def get_book(
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(db_session),
) -> BookOut:
    try:
        book = await store.get_book(session, book_id)
    except SQLAlchemyError:
        logger.exception("Error fetching book %s (user=%s)", book_id, ctx.user_id)
        raise InternalError("Error fetching book")
    return BookOut.model_validate(book)


@router.put("/{book_id}", response_model=BookOut)
async def update_book(
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
    payload: BookUpdate = Body(...),
    session: AsyncSession = Depends(db_session),
) -> BookOut:
    """Partial update; fields absent from the body are left untouched."""
    try:
        book = await store.update_book(session, book_id, payload.changes())
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error updating book %s (user=%s)", book_id, ctx.user_id)
        raise InternalError("Error updating book")

    logger.info("Book %s updated by %s", book.id, ctx.user_id)
    return BookOut.model_validate(book)


@router.delete("/{book_id}", response_model=MessageResponse)
async def delete_book(
    book_id: str,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(db_session),
) -> MessageResponse:
    try:
        await store.delete_book(session, book_id)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error deleting book %s (user=%s)", book_id, ctx.user_id)
        raise InternalError("Error deleting book")

    logger.info("Book %s deleted by %s", book_id, ctx.user_id)
    return MessageResponse(message="Book deleted successfully")
