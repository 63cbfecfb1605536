"""Connection response schemas (Relay specification).

- Edge pairs a node with its cursor
- PageInfo carries navigation metadata
- Connection is the page: edges in ascending display order plus PageInfo

Only the side of the page that was actually requested is reported: a
forward page fills ``has_next_page``/``end_cursor``, a backward page fills
``has_previous_page``/``start_cursor``; the other side is always
``False``/``None``.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Pagination metadata following GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether rows exist before a backward page
        has_next_page: Whether rows exist after a forward page
        start_cursor: Cursor of the first edge of a backward page
        end_cursor: Cursor of the last edge of a forward page
    """

    has_previous_page: bool = Field(
        default=False,
        description="Whether previous items exist",
    )
    has_next_page: bool = Field(
        default=False,
        description="Whether more items exist",
    )
    start_cursor: str | None = Field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = Field(
        default=None,
        description="Cursor of the last item",
    )

    model_config = ConfigDict(frozen=True)


class Edge(BaseModel, Generic[T]):
    """A node paired with its cursor."""

    cursor: str = Field(description="Cursor for this item")
    node: T = Field(description="The data item")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Connection(BaseModel, Generic[T]):
    """One page of a keyset-paginated collection.

    Client navigation:
        # First page
        GET /todos?first=10

        # Next page (using end_cursor from previous response)
        GET /todos?first=10&after=NmE0NWZkNzEtY2MzMi00...

        # Last page, then walk back (using start_cursor)
        GET /todos?last=10
        GET /todos?last=10&before=N2YyYTM1ZDctNmUyMC00...
    """

    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(description="Pagination metadata")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


__all__ = ["Connection", "Edge", "PageInfo"]
