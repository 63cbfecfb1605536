"""Key/order extractors.

An extractor is the per-entity capability that turns a row into the two
text parts of its cursor and turns those parts back into native values
that can be compared against the key and order columns.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Protocol

from keyset_relay.core.pagination.errors import ConversionError


class KeyOrderExtractor[K, O](Protocol):
    """Cursor part conversion for one entity type."""

    def to_cursor_parts(self, row: Any) -> tuple[str, str]:
        """Return ``(key_text, order_text)`` for a row."""
        ...

    def from_cursor_parts(self, key: str, order: str) -> tuple[K, O]:
        """Parse cursor parts into native values.

        Raises:
            ConversionError: If either part is malformed
        """
        ...


class UuidTimestampExtractor:
    """Extractor for rows keyed by a UUID and ordered by a timestamp.

    Keys render as canonical hyphenated UUIDs and orders as ISO 8601, so
    re-encoding decoded parts reproduces the original cursor.

    Example:
        extractor = UuidTimestampExtractor()  # reads row.id and row.created_at
        extractor.to_cursor_parts(todo)
        # ("6a45fd71-cc32-4eeb-823e-e8ef08ecd004", "2020-01-01T00:00:00.010000+00:00")
    """

    __slots__ = ("key_attr", "order_attr")

    def __init__(self, key_attr: str = "id", order_attr: str = "created_at") -> None:
        self.key_attr = key_attr
        self.order_attr = order_attr

    def to_cursor_parts(self, row: Any) -> tuple[str, str]:
        key: uuid.UUID = getattr(row, self.key_attr)
        order: datetime = getattr(row, self.order_attr)
        return str(key), order.isoformat()

    def from_cursor_parts(self, key: str, order: str) -> tuple[uuid.UUID, datetime]:
        try:
            key_value = uuid.UUID(key)
        except ValueError as e:
            raise ConversionError(f"Invalid cursor key: {e}", field=self.key_attr, value=key) from e

        try:
            order_value = datetime.fromisoformat(order)
        except ValueError as e:
            raise ConversionError(
                f"Invalid cursor order value: {e}", field=self.order_attr, value=order
            ) from e

        return key_value, order_value


__all__ = ["KeyOrderExtractor", "UuidTimestampExtractor"]
