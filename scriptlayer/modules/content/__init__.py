"""
Content Module - Black Box Interface

Purpose: Query structured platform data (contacts and similar providers)
Interface: ContentResolver.query(), query_cursor(), with_appended_id()
Hidden: SQLite access, URI parsing, SQL construction

Can be replaced with any resolver that returns closable cursors.
"""

from .resolver import (
    CONTENT_SCHEME,
    ContentResolver,
    Cursor,
    RowCursor,
    SqliteContentResolver,
    parse_content_uri,
    query_cursor,
    with_appended_id,
)

__all__ = [
    "CONTENT_SCHEME",
    "ContentResolver",
    "Cursor",
    "RowCursor",
    "SqliteContentResolver",
    "parse_content_uri",
    "query_cursor",
    "with_appended_id",
]
