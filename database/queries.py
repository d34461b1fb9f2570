"""
Listing query construction for the book catalog.

``BookListQuery`` is the closed set of filters, sort keys and paging
options a caller may ask for; it is validated before anything here turns
it into SQL, so request input never reaches the store as raw operators.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import ColumnElement, Select, func, select

from database.models import Book

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class SortField(str, Enum):
    PRICE = "price"
    RATING = "rating"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class BookListQuery(BaseModel):
    """Built from the query string, so sort keys also answer to their camelCase names."""

    model_config = ConfigDict(populate_by_name=True)

    author: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    title: Optional[str] = None
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    sort_by: Optional[SortField] = Field(default=None, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.ASC, alias="sortOrder")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


_SORT_COLUMNS = {
    SortField.PRICE: Book.price,
    SortField.RATING: Book.rating,
}


def build_book_filters(query: BookListQuery) -> List[ColumnElement[bool]]:
    """Conjunction of the supplied filters; absent (or empty) filters add nothing."""
    filters: List[ColumnElement[bool]] = []
    if query.author:
        filters.append(Book.author == query.author)
    if query.category:
        filters.append(Book.category == query.category)
    if query.rating is not None:
        filters.append(Book.rating == query.rating)
    if query.title:
        filters.append(Book.title.icontains(query.title, autoescape=True))
    return filters


def build_list_statements(query: BookListQuery) -> Tuple[Select, Select]:
    """
    Return ``(page_stmt, count_stmt)``.

    ``page_stmt`` selects one window of matching books, sorted when
    ``sort_by`` is given (store order otherwise); ``count_stmt`` counts all
    matches, ignoring the window.
    """
    filters = build_book_filters(query)

    page_stmt = select(Book).where(*filters)
    if query.sort_by is not None:
        column = _SORT_COLUMNS[query.sort_by]
        page_stmt = page_stmt.order_by(
            column.asc() if query.sort_order is SortOrder.ASC else column.desc()
        )
    page_stmt = page_stmt.offset(query.offset).limit(query.limit)

    count_stmt = select(func.count()).select_from(Book).where(*filters)
    return page_stmt, count_stmt


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit)
