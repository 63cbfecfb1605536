"""Range query construction for keyset pagination.

Instead of OFFSET, the page is selected with a WHERE clause that seeks past
the anchor row's composite position ``(order_field, key_field)``. Ties in
the order field are broken by the unique key, which makes the ordering
strict and total:

    forward:   order > a_o OR (order = a_o AND key > a_k)
               ORDER BY order ASC, key ASC
    backward:  order < a_o OR (order = a_o AND key < a_k)
               ORDER BY order DESC, key DESC

One extra row beyond the page size is requested; it only tells the
assembler whether more results exist and is never shown.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, and_, or_

from keyset_relay.core.pagination.cursor import CursorCodec
from keyset_relay.core.pagination.planner import Direction, RangeQueryPlan

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from keyset_relay.core.pagination.extractors import KeyOrderExtractor


@dataclass(slots=True, frozen=True)
class RangeQuery:
    """Filter, ordering and limit for one page fetch.

    Attributes:
        where: Seek predicate, or None when there is no anchor
        order_by: Sort clauses, order column first
        limit: Rows to fetch (page size + 1 lookahead row)
    """

    where: ColumnElement[bool] | None
    order_by: tuple[ColumnElement[Any], ...]
    limit: int

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply this range to a SQLAlchemy select statement."""
        if self.where is not None:
            statement = statement.where(self.where)
        return statement.order_by(*self.order_by).limit(self.limit)


def seek_predicate(
    order_column: Any,
    key_column: Any,
    order_value: Any,
    key_value: Any,
    direction: Direction,
) -> ColumnElement[bool]:
    """Strict composite comparison against the anchor position.

    Equivalent to the row comparison ``(order, key) > (a_o, a_k)`` (or
    ``<`` backward), spelled out so it works on every dialect.
    """
    compare = operator.lt if direction is Direction.BACKWARD else operator.gt
    return or_(
        compare(order_column, order_value),
        and_(order_column == order_value, compare(key_column, key_value)),
    )


def build_range_query(
    plan: RangeQueryPlan,
    extractor: KeyOrderExtractor[Any, Any],
    key_column: Any,
    order_column: Any,
) -> RangeQuery:
    """Turn a plan into a concrete range query.

    Args:
        plan: Direction, limit and anchor from the planner
        extractor: Parses the anchor's cursor parts into native values
        key_column: Unique key column (tie-breaker)
        order_column: Column the collection is ordered by

    Returns:
        RangeQuery requesting ``plan.limit + 1`` rows

    Raises:
        CursorError: If the anchor cursor cannot be decoded
        ConversionError: If the anchor's parts are not valid key/order values

    Example:
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)
        stmt = query.apply(select(Todo))
    """
    where = None
    if plan.anchor is not None:
        key_text, order_text = CursorCodec.decode(plan.anchor)
        anchor_key, anchor_order = extractor.from_cursor_parts(key_text, order_text)
        where = seek_predicate(order_column, key_column, anchor_order, anchor_key, plan.direction)

    if plan.backward:
        order_by = (order_column.desc(), key_column.desc())
    else:
        order_by = (order_column.asc(), key_column.asc())

    return RangeQuery(where=where, order_by=order_by, limit=plan.limit + 1)


__all__ = ["RangeQuery", "build_range_query", "seek_predicate"]
