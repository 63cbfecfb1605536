"""Interpret Relay connection arguments into a range query plan.

Direction is derived from which arguments are present:

    first / after   -> forward  (anchor = after)
    last  / before  -> backward (anchor = before)

Backward mode is chosen only when ``last`` or ``before`` is given and
neither ``first`` nor ``after`` is; every other combination, including no
arguments at all, pages forward. Supplying ``first`` together with
``last`` therefore pages forward and ignores ``last``/``before``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from keyset_relay.core.settings.pagination import PaginationSettings

DEFAULT_LIMIT = 40


class Direction(StrEnum):
    """Fetch direction relative to the anchor cursor."""

    FORWARD = "forward"
    BACKWARD = "backward"


class PaginationArgs(BaseModel):
    """Relay connection arguments as received from the caller.

    Attributes:
        first: Page size when paging forward
        after: Cursor to page forward from (exclusive)
        last: Page size when paging backward
        before: Cursor to page backward from (exclusive)
    """

    first: int | None = Field(default=None, ge=0, description="Forward page size")
    after: str | None = Field(default=None, description="Forward anchor cursor")
    last: int | None = Field(default=None, ge=0, description="Backward page size")
    before: str | None = Field(default=None, description="Backward anchor cursor")

    model_config = {"frozen": True}

    @property
    def is_backward(self) -> bool:
        return (
            (self.last is not None or self.before is not None)
            and self.first is None
            and self.after is None
        )


@dataclass(slots=True, frozen=True)
class RangeQueryPlan:
    """Directional range request derived from ``PaginationArgs``.

    Attributes:
        direction: Forward or backward from the anchor
        limit: Number of rows to show (always >= 1)
        anchor: Still-encoded cursor to seek past, if any
    """

    direction: Direction
    limit: int = DEFAULT_LIMIT
    anchor: str | None = None

    @property
    def backward(self) -> bool:
        return self.direction is Direction.BACKWARD


def plan_pagination(
    args: PaginationArgs | None = None,
    *,
    settings: PaginationSettings | None = None,
    **kwargs: int | str | None,
) -> RangeQueryPlan:
    """Build a ``RangeQueryPlan`` from connection arguments.

    Args:
        args: Parsed arguments. Keyword arguments (``first=2, after=...``)
            are accepted instead for direct calls.
        settings: Supplies ``default_limit`` and the optional ``max_limit``

    Returns:
        Plan with direction, clamped limit and the raw anchor cursor

    Example:
        plan = plan_pagination(first=2, after=cursor)
        plan.direction  # Direction.FORWARD
    """
    if args is None:
        args = PaginationArgs(**kwargs)  # type: ignore[arg-type]

    backward = args.is_backward
    requested = args.last if backward else args.first

    default_limit = settings.default_limit if settings else DEFAULT_LIMIT
    limit = max(1, requested if requested is not None else default_limit)
    if settings and settings.max_limit is not None:
        limit = min(limit, settings.max_limit)

    return RangeQueryPlan(
        direction=Direction.BACKWARD if backward else Direction.FORWARD,
        limit=limit,
        anchor=args.before if backward else args.after,
    )


__all__ = [
    "DEFAULT_LIMIT",
    "Direction",
    "PaginationArgs",
    "RangeQueryPlan",
    "plan_pagination",
]
