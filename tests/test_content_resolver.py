"""
Unit tests for the content resolver.

Tests cover:
- Content URI parsing and id appending
- SqliteContentResolver queries, projections and filters
- Unavailable data reported as None, not raised
- query_cursor closing cursors on every exit path
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scriptlayer.modules.content import (
    RowCursor,
    SqliteContentResolver,
    parse_content_uri,
    query_cursor,
    with_appended_id,
)


# =============================================================================
# URI Helpers
# =============================================================================


class TestContentUri:
    """Tests for content URI helpers."""

    def test_parse_table_uri(self):
        assert parse_content_uri("content://contacts/people") == ("contacts", "people", None)

    def test_parse_row_uri(self):
        assert parse_content_uri("content://contacts/people/42") == ("contacts", "people", 42)

    @pytest.mark.parametrize(
        "uri",
        [
            "",
            "http://contacts/people",
            "content://contacts",
            "content://contacts/people/abc",
            "content://contacts/people/1/extra",
            "content://contacts/peo;ple",
        ],
    )
    def test_parse_malformed(self, uri):
        assert parse_content_uri(uri) is None

    def test_with_appended_id(self):
        assert with_appended_id("content://contacts/people", 7) == "content://contacts/people/7"
        assert with_appended_id("content://contacts/people/", 7) == "content://contacts/people/7"


# =============================================================================
# RowCursor
# =============================================================================


class TestRowCursor:
    """Tests for the in-memory cursor."""

    def test_rows_and_count(self):
        cursor = RowCursor(["a", "b"], [(1, 2), (3, 4)])
        assert cursor.column_names == ["a", "b"]
        assert cursor.count == 2
        assert list(cursor) == [(1, 2), (3, 4)]
        assert cursor.first() == (1, 2)

    def test_empty_first(self):
        assert RowCursor(["a"], []).first() is None

    def test_closed_cursor_cannot_be_read(self):
        cursor = RowCursor(["a"], [(1,)])
        cursor.close()
        assert cursor.closed is True
        with pytest.raises(RuntimeError):
            list(cursor)


# =============================================================================
# SqliteContentResolver
# =============================================================================


class TestSqliteContentResolver:
    """Tests for SqliteContentResolver."""

    def test_query_all_columns(self, content_resolver):
        cursor = content_resolver.query("content://contacts/people")
        assert cursor.column_names == ["_id", "name", "primary_phone", "primary_email", "type", "notes"]
        assert cursor.count == 3

    def test_projection(self, content_resolver):
        cursor = content_resolver.query("content://contacts/people", projection=["_id", "name"])
        assert list(cursor) == [(1, "Ada Lovelace"), (2, "Alan Turing"), (3, "Grace Hopper")]

    def test_row_id(self, content_resolver):
        cursor = content_resolver.query("content://contacts/people/2", projection=["name"])
        assert list(cursor) == [("Alan Turing",)]

    def test_selection_and_sort(self, content_resolver):
        cursor = content_resolver.query(
            "content://contacts/people",
            projection=["name"],
            selection="type = ?",
            selection_args=[1],
            sort_order="name DESC",
        )
        assert list(cursor) == [("Grace Hopper",), ("Ada Lovelace",)]

    def test_empty_table(self, empty_content_resolver):
        cursor = empty_content_resolver.query("content://contacts/people")
        assert cursor is not None
        assert cursor.count == 0
        assert list(cursor) == []

    def test_unknown_table_returns_none(self, content_resolver):
        assert content_resolver.query("content://contacts/groups") is None

    def test_unknown_authority_returns_none(self, content_resolver):
        assert content_resolver.query("content://sms/people") is None

    def test_any_authority_when_unrestricted(self, contacts_db):
        with SqliteContentResolver(contacts_db) as resolver:
            assert resolver.query("content://anything/people").count == 3

    def test_malformed_uri_returns_none(self, content_resolver):
        assert content_resolver.query("people") is None

    def test_unknown_column_returns_none(self, content_resolver):
        assert content_resolver.query("content://contacts/people", projection=["nickname"]) is None

    def test_unknown_column_alongside_known_returns_none(self, content_resolver):
        assert content_resolver.query("content://contacts/people", projection=["name", "bogus"]) is None

    def test_invalid_projection_returns_none(self, content_resolver):
        assert content_resolver.query("content://contacts/people", projection=["name; DROP TABLE people"]) is None
        assert content_resolver.query("content://contacts/people").count == 3

    def test_invalid_sort_order_returns_none(self, content_resolver):
        assert content_resolver.query("content://contacts/people", sort_order="name; --") is None

    def test_in_memory_database(self):
        with SqliteContentResolver(":memory:") as resolver:
            assert resolver.query("content://contacts/people") is None


# =============================================================================
# query_cursor
# =============================================================================


class TestQueryCursor:
    """Tests for scoped cursor acquisition."""

    def test_closes_after_block(self, content_resolver):
        with query_cursor(content_resolver, "content://contacts/people") as cursor:
            assert cursor.count == 3
        assert cursor.closed is True

    def test_closes_on_exception(self):
        cursor = MagicMock()
        resolver = MagicMock()
        resolver.query.return_value = cursor

        with pytest.raises(ValueError):
            with query_cursor(resolver, "content://contacts/people"):
                raise ValueError("boom")

        cursor.close.assert_called_once()

    def test_closes_on_early_return(self):
        cursor = MagicMock()
        resolver = MagicMock()
        resolver.query.return_value = cursor

        def first_column():
            with query_cursor(resolver, "content://contacts/people") as c:
                return c.column_names

        first_column()
        cursor.close.assert_called_once()

    def test_yields_none_without_cursor(self):
        resolver = MagicMock()
        resolver.query.return_value = None

        with query_cursor(resolver, "content://contacts/people") as cursor:
            assert cursor is None

    def test_passes_query_arguments(self):
        resolver = MagicMock()
        resolver.query.return_value = None

        with query_cursor(resolver, "content://contacts/people", ["_id"], "type = ?", [1], "_id"):
            pass

        resolver.query.assert_called_once_with("content://contacts/people", ["_id"], "type = ?", [1], "_id")
