"""
Contacts facade.

Reads the platform contact list through the session's content resolver.
Every query runs inside ``query_cursor`` so the cursor is closed whether the
result is full, empty or the read fails.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..content import ContentResolver, query_cursor, with_appended_id
from ..rpc import RpcParameter, RpcReceiver, rpc

logger = logging.getLogger("scriptlayer.facades.contacts")

PEOPLE_URI = "content://contacts/people"

DEFAULT_ATTRIBUTES = ("_id", "name", "primary_phone", "primary_email", "type")


def _as_string(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class ContactsFacade(RpcReceiver):
    """Provides access to contacts related functionality."""

    @property
    def resolver(self) -> Optional[ContentResolver]:
        resolver = getattr(self.context, "content_resolver", None)
        if resolver is None:
            logger.warning("No content resolver available for contacts queries")
        return resolver

    @staticmethod
    def _columns(attributes: Optional[Sequence[str]]) -> List[str]:
        """Use the default columns when no attributes are given."""
        if not attributes:
            return list(DEFAULT_ATTRIBUTES)
        return [str(attribute) for attribute in attributes]

    @rpc("Returns a List of all possible attributes for contact list.")
    def contactsGetAttributes(self) -> List[str]:
        resolver = self.resolver
        if resolver is None:
            return []

        with query_cursor(resolver, PEOPLE_URI) as cursor:
            if cursor is None:
                return []
            return cursor.column_names

    # TODO: Accept attribute/value pairs to narrow the id selection.
    @rpc("Returns a List of all contact IDs.")
    def contactsGetIds(self) -> List[int]:
        resolver = self.resolver
        if resolver is None:
            return []

        with query_cursor(resolver, PEOPLE_URI, projection=["_id"]) as cursor:
            if cursor is None:
                return []
            return [int(row[0]) for row in cursor]

    @rpc(
        "Returns a List of all contacts.",
        returns="a List of contacts as Maps",
        params=[RpcParameter("attributes", list, optional=True)],
    )
    def contactsGet(self, attributes: Optional[List[str]] = None) -> List[Dict[str, Optional[str]]]:
        resolver = self.resolver
        if resolver is None:
            return []

        columns = self._columns(attributes)
        with query_cursor(resolver, PEOPLE_URI, projection=columns) as cursor:
            if cursor is None:
                return []
            return [
                {column: _as_string(value) for column, value in zip(columns, row)}
                for row in cursor
            ]

    @rpc(
        "Returns contact attributes specified by Id.",
        params=[
            RpcParameter("id", int, "contact ID"),
            RpcParameter("attributes", list, optional=True),
        ],
    )
    def contactsGetById(
        self, id: int, attributes: Optional[List[str]] = None
    ) -> Optional[Dict[str, Optional[str]]]:
        resolver = self.resolver
        if resolver is None:
            return None

        columns = self._columns(attributes)
        uri = with_appended_id(PEOPLE_URI, id)
        with query_cursor(resolver, uri, projection=columns) as cursor:
            if cursor is None:
                return None
            row = cursor.first()
            if row is not None:
                return {column: _as_string(value) for column, value in zip(columns, row)}

        logger.debug(f"No contact with id {id}")
        return None

    @rpc("Returns the number of contacts.")
    def contactsGetCount(self) -> int:
        resolver = self.resolver
        if resolver is None:
            return 0

        with query_cursor(resolver, PEOPLE_URI) as cursor:
            if cursor is None:
                return 0
            return cursor.count
