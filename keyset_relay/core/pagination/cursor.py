"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode a position in a totally ordered
result set. A cursor carries two text values: the row's unique key and
the value of the field the collection is ordered by.

The cursor format is:
1. UTF-8 text ``"{key}:{order}"``
2. Standard padded base64 encoded

Example:
    key:     6a45fd71-cc32-4eeb-823e-e8ef08ecd004
    order:   2020-01-01T00:00:00.010000+00:00

Decoding splits on the first ``:`` only, so the order value may contain
colons (timestamps do) but the key must not.
"""

from __future__ import annotations

import base64
import binascii

from keyset_relay.core.pagination.errors import (
    CursorDecodeError,
    CursorEncodingError,
    InvalidCursorFormat,
)
from keyset_relay.infra.logging import get_lazy_logger

SEPARATOR = ":"

_lazy = get_lazy_logger(__name__)


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        # Encoding
        cursor = CursorCodec.encode("User", "1")  # "VXNlcjox"

        # Decoding
        key, order = CursorCodec.decode("VXNlcjox")  # ("User", "1")
    """

    @staticmethod
    def encode(key: str, order: str) -> str:
        """Encode a ``(key, order)`` pair to an opaque string.

        Args:
            key: Unique key of the row (must not contain ``:``)
            order: Sort field value of the row

        Returns:
            Standard padded base64 string
        """
        raw = f"{key}{SEPARATOR}{order}".encode()
        return base64.b64encode(raw).decode("ascii")

    @staticmethod
    def decode(cursor: str) -> tuple[str, str]:
        """Decode a cursor string back to its ``(key, order)`` pair.

        Args:
            cursor: Standard padded base64 cursor string

        Returns:
            Tuple of key and order text

        Raises:
            CursorDecodeError: If cursor is not valid base64
            CursorEncodingError: If decoded bytes are not UTF-8
            InvalidCursorFormat: If decoded text has no separator
        """
        try:
            raw = base64.b64decode(cursor, validate=True)
        except (binascii.Error, ValueError) as e:
            _lazy.debug(lambda: f"cursor.decode: invalid base64 {cursor!r}: {e}")
            raise CursorDecodeError(f"Invalid cursor encoding: {e}", cursor=cursor) from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CursorEncodingError("Cursor is not valid UTF-8", cursor=cursor) from e

        parts = text.split(SEPARATOR, 1)
        if len(parts) != 2:
            _lazy.debug(lambda: f"cursor.decode: missing separator in {cursor!r}")
            raise InvalidCursorFormat("Cursor is missing the key separator", cursor=cursor)

        return parts[0], parts[1]


__all__ = ["SEPARATOR", "CursorCodec"]
