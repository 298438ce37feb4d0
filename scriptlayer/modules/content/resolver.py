"""
Content resolver - query access to structured platform data.

Facades read platform data (contacts and the like) through a resolver that
answers ``content://<authority>/<table>[/<id>]`` URIs with a cursor of rows.
Every cursor must be closed by the caller; ``query_cursor`` does that on all
exit paths.
"""

import logging
import re
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Protocol, Sequence, Tuple, Union

logger = logging.getLogger("scriptlayer.content")

CONTENT_SCHEME = "content://"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_SORT_TERM = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\s+(ASC|DESC))?$", re.IGNORECASE)


class Cursor(Protocol):
    """Rows returned by a content query."""

    @property
    def column_names(self) -> List[str]:
        ...

    @property
    def count(self) -> int:
        ...

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        ...

    def first(self) -> Optional[Tuple[Any, ...]]:
        ...

    def close(self) -> None:
        ...


class ContentResolver(Protocol):
    """Protocol for structured data sources - allows swappable implementations."""

    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> Optional[Cursor]:
        """
        Query a content URI.

        Args:
            uri: content:// URI, optionally ending in a row id
            projection: Columns to return (None for all)
            selection: SQL-style row filter with ? placeholders
            selection_args: Values for the selection placeholders
            sort_order: ORDER BY terms

        Returns:
            Cursor, or None if the source is unavailable
        """
        ...


class RowCursor:
    """In-memory cursor over fetched rows."""

    def __init__(self, column_names: Sequence[str], rows: Sequence[Tuple[Any, ...]]):
        self._column_names = list(column_names)
        self._rows = list(rows)
        self._closed = False

    @property
    def column_names(self) -> List[str]:
        return list(self._column_names)

    @property
    def count(self) -> int:
        return len(self._rows)

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        if self._closed:
            raise RuntimeError("Cursor is closed")
        return iter(self._rows)

    def first(self) -> Optional[Tuple[Any, ...]]:
        """Return the first row, or None for an empty cursor."""
        if self._closed:
            raise RuntimeError("Cursor is closed")
        return self._rows[0] if self._rows else None

    def close(self) -> None:
        self._closed = True
        self._rows = []


@contextmanager
def query_cursor(
    resolver: ContentResolver,
    uri: str,
    projection: Optional[Sequence[str]] = None,
    selection: Optional[str] = None,
    selection_args: Optional[Sequence[Any]] = None,
    sort_order: Optional[str] = None,
) -> Iterator[Optional[Cursor]]:
    """
    Run a query and close the resulting cursor when the block exits.

    Yields None when the resolver has no cursor to give.
    """
    cursor = resolver.query(uri, projection, selection, selection_args, sort_order)
    try:
        yield cursor
    finally:
        if cursor is not None:
            cursor.close()


def with_appended_id(uri: str, row_id: int) -> str:
    """Append a row id to a content URI."""
    return f"{uri.rstrip('/')}/{int(row_id)}"


def parse_content_uri(uri: str) -> Optional[Tuple[str, str, Optional[int]]]:
    """
    Split a content URI into (authority, table, row id).

    Returns None for anything that is not a well-formed content URI.
    """
    if not uri or not uri.startswith(CONTENT_SCHEME):
        return None

    parts = [part for part in uri[len(CONTENT_SCHEME):].split("/") if part]
    if len(parts) not in (2, 3):
        return None

    authority, table = parts[0], parts[1]
    if not _IDENTIFIER.match(table):
        return None

    row_id = None
    if len(parts) == 3:
        try:
            row_id = int(parts[2])
        except ValueError:
            return None
    return authority, table, row_id


class SqliteContentResolver:
    """
    Content resolver backed by a SQLite database.

    Each URI table maps onto the SQLite table of the same name; the authority
    is only checked against ``authorities`` when that set is given.
    """

    def __init__(self, db_path: Union[str, Path], authorities: Optional[Sequence[str]] = None):
        """
        Initialize resolver.

        Args:
            db_path: Path to SQLite database (":memory:" is accepted)
            authorities: Content authorities served, None for any
        """
        self.db_path = str(db_path)
        self.authorities = set(authorities) if authorities is not None else None
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)

    def _build_sql(
        self,
        table: str,
        row_id: Optional[int],
        projection: Optional[Sequence[str]],
        selection: Optional[str],
        sort_order: Optional[str],
    ) -> Optional[str]:
        if projection:
            for column in projection:
                if not _IDENTIFIER.match(column):
                    logger.error(f"Invalid column in projection: {column!r}")
                    return None
            # Unquoted so an unknown column is an error, not a string literal
            columns = ", ".join(projection)
        else:
            columns = "*"

        clauses = []
        if row_id is not None:
            clauses.append("_id = ?")
        if selection:
            clauses.append(f"({selection})")

        sql = f'SELECT {columns} FROM "{table}"'
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        if sort_order:
            terms = [term.strip() for term in sort_order.split(",")]
            if not all(_SORT_TERM.match(term) for term in terms):
                logger.error(f"Invalid sort order: {sort_order!r}")
                return None
            sql += " ORDER BY " + ", ".join(terms)
        return sql

    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> Optional[RowCursor]:
        """Query the table behind a content URI."""
        parsed = parse_content_uri(uri)
        if parsed is None:
            logger.error(f"Malformed content URI: {uri}")
            return None

        authority, table, row_id = parsed
        if self.authorities is not None and authority not in self.authorities:
            logger.warning(f"Unknown content authority {authority} in {uri}")
            return None

        sql = self._build_sql(table, row_id, projection, selection, sort_order)
        if sql is None:
            return None

        args: List[Any] = []
        if row_id is not None:
            args.append(row_id)
        args.extend(selection_args or [])

        with self._lock:
            try:
                cursor = self._conn.execute(sql, args)
                try:
                    rows = cursor.fetchall()
                    column_names = [column[0] for column in cursor.description or []]
                finally:
                    cursor.close()
            except sqlite3.Error as e:
                logger.error(f"Query for {uri} failed: {e}")
                return None

        logger.debug(f"Query {uri} returned {len(rows)} rows")
        return RowCursor(column_names, rows)

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "SqliteContentResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
