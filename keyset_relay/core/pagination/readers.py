"""Sorted-range readers.

A reader executes a ``RangeQuery`` against the underlying store and
returns rows already sorted by its ``order_by``. The engine makes exactly
one reader call per page; whether that call blocks or awaits, and what
isolation it runs under, is the reader's business.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy.exc import SQLAlchemyError

from keyset_relay.core.pagination.errors import UnderlyingQueryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_relay.core.pagination.filters import RangeQuery

logger = logging.getLogger(__name__)


class SortedRangeReader[T](Protocol):
    """Executes a range query and returns its rows in query order."""

    async def fetch(self, query: RangeQuery) -> Sequence[T]: ...


class SelectRangeReader[T]:
    """Reader backed by a SQLAlchemy select and an async session.

    The statement carries any caller filters (ownership, soft delete, ...);
    the range query adds the seek predicate, ordering and limit on top.

    Example:
        reader = SelectRangeReader(session, select(Todo).where(Todo.is_done.is_(False)))
        rows = await reader.fetch(query)
    """

    __slots__ = ("session", "statement")

    def __init__(self, session: AsyncSession, statement: Select[tuple[T]]) -> None:
        self.session = session
        self.statement = statement

    async def fetch(self, query: RangeQuery) -> Sequence[T]:
        """Execute the paginated statement.

        Raises:
            UnderlyingQueryError: If the database call fails
        """
        stmt: Select[Any] = query.apply(self.statement)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.warning(
                "Range query failed",
                extra={"operation": "db.fetch_range", "error": type(e).__name__},
            )
            raise UnderlyingQueryError(f"Range query failed: {e}") from e
        return result.scalars().all()


__all__ = ["SelectRangeReader", "SortedRangeReader"]
