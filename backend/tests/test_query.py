"""Pagination and filter helpers shared by the list endpoints."""

import pytest
from sqlalchemy import Column, MetaData, String, Table
from sqlalchemy.dialects import sqlite

from influencer_network.schemas.common import PaginationMeta
from influencer_network.services.query import (
    PaginationParams,
    date_range_clauses,
    parse_csv,
    search_clause,
)

_table = Table("things", MetaData(), Column("name", String), Column("notes", String))


class TestPagination:

    @pytest.mark.parametrize("page, limit, skip", [(1, 10, 0), (2, 10, 10), (5, 25, 100)])
    def test_skip(self, page, limit, skip):
        assert PaginationParams(page, limit).skip == skip

    def test_meta_rounds_pages_up(self):
        meta = PaginationMeta.build(total=21, page=2, limit=10)
        assert meta.total_pages == 3
        assert (meta.next_page, meta.prev_page) == (3, 1)
        assert meta.has_next_page is True
        assert meta.has_prev_page is True

    def test_meta_last_page(self):
        meta = PaginationMeta.build(total=21, page=3, limit=10)
        assert meta.has_next_page is False
        assert meta.next_page is None

    def test_meta_empty(self):
        meta = PaginationMeta.build(total=0, page=1, limit=10)
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False

    def test_meta_serializes_camel_case(self):
        body = PaginationMeta.build(total=5, page=1, limit=10).model_dump(by_alias=True)
        assert body == {
            "currentPage": 1,
            "totalPages": 1,
            "totalCount": 5,
            "limit": 10,
            "hasNextPage": False,
            "hasPrevPage": False,
            "nextPage": None,
            "prevPage": None,
        }


class TestFilters:

    def test_blank_search_is_ignored(self):
        assert search_clause(None, [_table.c.name]) is None
        assert search_clause("   ", [_table.c.name]) is None

    def test_search_ors_columns(self):
        sql = str(search_clause(" acme ", [_table.c.name, _table.c.notes]).compile(dialect=sqlite.dialect()))
        assert sql.count("LIKE") == 2
        assert " OR " in sql

    def test_date_range_sides_are_optional(self):
        assert date_range_clauses(_table.c.name, None, None) == []
        assert len(date_range_clauses(_table.c.name, "2026-01-01", None)) == 1
        assert len(date_range_clauses(_table.c.name, "2026-01-01", "2026-12-31")) == 2

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, []), ("", []), ("fashion", ["fashion"]), (" fashion, tech ,,beauty ", ["fashion", "tech", "beauty"])],
    )
    def test_parse_csv(self, raw, expected):
        assert parse_csv(raw) == expected
