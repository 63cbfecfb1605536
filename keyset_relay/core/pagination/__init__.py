"""Cursor-based (keyset) pagination with a Relay Connection contract.

This package provides keyset pagination that is:
- Stable: pages are anchored on the last-seen composite key, not an offset
- Bidirectional: ``first/after`` pages forward, ``last/before`` backward
- Single round trip: one lookahead row tells whether more results exist

Usage:
    from keyset_relay.core.pagination import (
        KeysetPaginator,
        PaginationArgs,
        UuidTimestampExtractor,
    )

    todos = KeysetPaginator(Todo.id, Todo.created_at, UuidTimestampExtractor())
    page = await todos.paginate_statement(session, select(Todo), PaginationArgs(first=20))

    if page.page_info.has_next_page:
        next_args = PaginationArgs(first=20, after=page.page_info.end_cursor)

Cursors are opaque base64 strings that clients pass back unchanged. The
same envelope also carries global entity identifiers (see ``ids``).
"""

from keyset_relay.core.pagination.assembler import assemble_connection
from keyset_relay.core.pagination.cursor import CursorCodec
from keyset_relay.core.pagination.errors import (
    ConversionError,
    CursorDecodeError,
    CursorEncodingError,
    CursorError,
    IdConversionError,
    InvalidCursorFormat,
    PaginationError,
    UnderlyingQueryError,
)
from keyset_relay.core.pagination.extractors import KeyOrderExtractor, UuidTimestampExtractor
from keyset_relay.core.pagination.filters import RangeQuery, build_range_query, seek_predicate
from keyset_relay.core.pagination.ids import OpaqueIdCodec, from_global_id, to_global_id
from keyset_relay.core.pagination.paginator import KeysetPaginator
from keyset_relay.core.pagination.planner import (
    DEFAULT_LIMIT,
    Direction,
    PaginationArgs,
    RangeQueryPlan,
    plan_pagination,
)
from keyset_relay.core.pagination.readers import SelectRangeReader, SortedRangeReader
from keyset_relay.core.pagination.schemas import Connection, Edge, PageInfo

__all__ = [
    "DEFAULT_LIMIT",
    # Schemas
    "Connection",
    # Errors
    "ConversionError",
    # Codecs
    "CursorCodec",
    "CursorDecodeError",
    "CursorEncodingError",
    "CursorError",
    # Planning
    "Direction",
    "Edge",
    "IdConversionError",
    "InvalidCursorFormat",
    # Extractors
    "KeyOrderExtractor",
    # Engine
    "KeysetPaginator",
    "OpaqueIdCodec",
    "PageInfo",
    "PaginationArgs",
    "PaginationError",
    # Query building and execution
    "RangeQuery",
    "RangeQueryPlan",
    "SelectRangeReader",
    "SortedRangeReader",
    "UnderlyingQueryError",
    "UuidTimestampExtractor",
    "assemble_connection",
    "build_range_query",
    "from_global_id",
    "plan_pagination",
    "seek_predicate",
    "to_global_id",
]
