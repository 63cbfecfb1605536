"""Assemble a Connection from over-fetched rows.

The reader returns up to ``limit + 1`` rows in fetch order (descending for
backward pages). The assembler:

1. Flags ``has_more`` when the lookahead row is present.
2. Reverses backward pages so edges are always in ascending display order;
   the lookahead row, farthest from the anchor, then sits at index 0.
3. Drops the lookahead row: index 0 backward, the last row forward.
4. Encodes a cursor for each surviving row.
5. Builds PageInfo for the requested side only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from keyset_relay.core.pagination.cursor import CursorCodec
from keyset_relay.core.pagination.schemas import Connection, Edge, PageInfo

if TYPE_CHECKING:
    from collections.abc import Sequence

    from keyset_relay.core.pagination.extractors import KeyOrderExtractor
    from keyset_relay.core.pagination.planner import RangeQueryPlan


def assemble_connection[T](
    rows: Sequence[T],
    plan: RangeQueryPlan,
    extractor: KeyOrderExtractor[Any, Any],
) -> Connection[T]:
    """Build the page from rows returned in query order.

    Args:
        rows: At most ``plan.limit + 1`` rows, ordered as fetched
        plan: The plan the rows were fetched with
        extractor: Produces each row's cursor parts

    Returns:
        Connection with ascending edges and direction-dependent PageInfo
    """
    nodes = list(rows)
    has_more = len(nodes) > plan.limit

    if plan.backward:
        nodes.reverse()

    if has_more:
        del nodes[0 if plan.backward else -1]

    edges: list[Edge[T]] = [
        Edge(cursor=CursorCodec.encode(*extractor.to_cursor_parts(node)), node=node)
        for node in nodes
    ]

    if plan.backward:
        page_info = PageInfo(
            has_previous_page=has_more,
            has_next_page=False,
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=None,
        )
    else:
        page_info = PageInfo(
            has_previous_page=False,
            has_next_page=has_more,
            start_cursor=None,
            end_cursor=edges[-1].cursor if edges else None,
        )

    return Connection(edges=edges, page_info=page_info)


__all__ = ["assemble_connection"]
