"""Generic keyset paginator.

One ``KeysetPaginator`` is built per entity type from its key column, its
order column and its extractor. Each call is a pure single pass:

    plan_pagination -> build_range_query -> reader.fetch -> assemble_connection

Example:
    todos = KeysetPaginator(Todo.id, Todo.created_at, UuidTimestampExtractor())

    page = await todos.paginate_statement(
        session, select(Todo), PaginationArgs(first=10, after=cursor)
    )
    for edge in page.edges:
        print(edge.cursor, edge.node.text)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_relay.core.pagination.assembler import assemble_connection
from keyset_relay.core.pagination.filters import RangeQuery, build_range_query
from keyset_relay.core.pagination.planner import (
    PaginationArgs,
    RangeQueryPlan,
    plan_pagination,
)
from keyset_relay.core.pagination.readers import SelectRangeReader
from keyset_relay.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_relay.core.pagination.extractors import KeyOrderExtractor
    from keyset_relay.core.pagination.readers import SortedRangeReader
    from keyset_relay.core.pagination.schemas import Connection
    from keyset_relay.core.settings.pagination import PaginationSettings


class KeysetPaginator[T]:
    """Bidirectional keyset pagination over one entity type.

    Attributes:
        key_column: Unique key column used as tie-breaker
        order_column: Column defining the collection's natural order
        extractor: Converts rows and cursor parts for this entity
        settings: Optional default/maximum page size
    """

    __slots__ = ("_lazy", "extractor", "key_column", "name", "order_column", "settings")

    def __init__(
        self,
        key_column: Any,
        order_column: Any,
        extractor: KeyOrderExtractor[Any, Any],
        *,
        settings: PaginationSettings | None = None,
        name: str | None = None,
    ) -> None:
        self.key_column = key_column
        self.order_column = order_column
        self.extractor = extractor
        self.settings = settings
        self.name = name or getattr(getattr(key_column, "class_", None), "__name__", "rows")
        self._lazy = get_lazy_logger(__name__, entity=self.name)

    def plan(self, args: PaginationArgs) -> RangeQueryPlan:
        return plan_pagination(args, settings=self.settings)

    def build(self, plan: RangeQueryPlan) -> RangeQuery:
        """Build the range query for a plan.

        Raises:
            CursorError: If the anchor cursor is malformed
            ConversionError: If the anchor's parts cannot be parsed
        """
        return build_range_query(plan, self.extractor, self.key_column, self.order_column)

    async def paginate(
        self,
        reader: SortedRangeReader[T],
        args: PaginationArgs | None = None,
    ) -> Connection[T]:
        """Resolve one page through a reader.

        Args:
            reader: Executes the range query (called exactly once)
            args: Connection arguments; None means the first default page

        Returns:
            Connection with edges in ascending order

        Raises:
            CursorError: If the anchor cursor is malformed
            ConversionError: If the anchor's parts cannot be parsed
            UnderlyingQueryError: If the reader fails
        """
        plan = self.plan(args or PaginationArgs())
        query = self.build(plan)
        rows = await reader.fetch(query)
        connection = assemble_connection(rows, plan, self.extractor)

        self._lazy.debug(
            lambda: (
                f"paginate: {self.name}({plan.direction}, limit={plan.limit}, "
                f"anchored={plan.anchor is not None}) -> {len(connection.edges)} edges, "
                f"has_previous={connection.page_info.has_previous_page}, "
                f"has_next={connection.page_info.has_next_page}"
            )
        )
        return connection

    async def paginate_statement(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]],
        args: PaginationArgs | None = None,
    ) -> Connection[T]:
        """Resolve one page of a SQLAlchemy select."""
        return await self.paginate(SelectRangeReader(session, statement), args)


__all__ = ["KeysetPaginator"]
