"""
Tests for listing query construction.
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.dialects import sqlite

from database.queries import (
    BookListQuery,
    SortField,
    SortOrder,
    build_book_filters,
    build_list_statements,
    page_count,
)


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


class TestBookListQuery:
    def test_defaults(self):
        q = BookListQuery()
        assert (q.page, q.limit, q.sort_by, q.sort_order) == (1, 10, None, SortOrder.ASC)

    @pytest.mark.parametrize("field,value", [("page", 0), ("limit", 0), ("limit", 101), ("rating", 5.5)])
    def test_out_of_bounds_rejected(self, field, value):
        with pytest.raises(ValidationError):
            BookListQuery(**{field: value})

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(ValidationError):
            BookListQuery(sort_by="title")

    def test_offset(self):
        assert BookListQuery(page=3, limit=20).offset == 40


class TestBuildFilters:
    def test_no_filters(self):
        assert build_book_filters(BookListQuery()) == []

    def test_each_supplied_filter_adds_a_clause(self):
        q = BookListQuery(author="Le Guin", category="SF", rating=4, title="dark")
        assert len(build_book_filters(q)) == 4

    def test_title_is_case_insensitive_substring(self):
        page_stmt, _ = build_list_statements(BookListQuery(title="foo"))
        sql = _sql(page_stmt).lower()
        assert "lower(books.title) like" in sql
        assert "'foo'" in sql

    def test_title_wildcards_are_escaped(self):
        page_stmt, _ = build_list_statements(BookListQuery(title="50%_off"))
        sql = _sql(page_stmt)
        assert "50/%/_off" in sql
        assert "ESCAPE '/'" in sql


class TestBuildStatements:
    def test_sort_and_window(self):
        q = BookListQuery(page=2, limit=10, sort_by=SortField.PRICE, sort_order=SortOrder.DESC)
        page_stmt, _ = build_list_statements(q)
        sql = _sql(page_stmt)
        assert "ORDER BY books.price DESC" in sql
        assert "LIMIT 10 OFFSET 10" in sql

    def test_no_sort_field_means_no_order_by(self):
        page_stmt, _ = build_list_statements(BookListQuery(sort_order=SortOrder.DESC))
        assert "ORDER BY" not in _sql(page_stmt)

    def test_count_ignores_window(self):
        _, count_stmt = build_list_statements(BookListQuery(page=5, limit=3, author="X"))
        sql = _sql(count_stmt)
        assert "count(*)" in sql
        assert "LIMIT" not in sql
        assert "books.author = 'X'" in sql


@pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (25, 10, 3), (30, 10, 3), (1, 100, 1)])
def test_page_count(total, limit, pages):
    assert page_count(total, limit) == pages
