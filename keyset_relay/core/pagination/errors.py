"""Pagination exceptions.

Every failure raised while decoding cursors, converting cursor parts into
native key/order values, or fetching the page is a subclass of
``PaginationError``. They are terminal for the call: the engine never
returns a partial page or substitutes a default after one of these.

Hierarchy:
    PaginationError
    ├── CursorError
    │   ├── CursorDecodeError      (not valid base64)
    │   ├── CursorEncodingError    (decoded bytes are not UTF-8)
    │   └── InvalidCursorFormat    (no ``:`` separator)
    ├── ConversionError            (key/order text cannot be parsed)
    │   └── IdConversionError      (malformed opaque-ID token)
    └── UnderlyingQueryError       (reader failure, original as __cause__)
"""

from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for the pagination engine."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class CursorError(PaginationError):
    """Cursor string could not be decoded into a ``(key, order)`` pair."""

    def __init__(self, message: str, cursor: str | None = None):
        self.cursor = cursor
        details = {"cursor": cursor} if cursor is not None else {}
        super().__init__(message, details=details)


class CursorDecodeError(CursorError):
    """Cursor is not valid padded base64."""


class CursorEncodingError(CursorError):
    """Decoded cursor bytes are not valid UTF-8."""


class InvalidCursorFormat(CursorError):
    """Decoded cursor text does not contain the ``key:order`` separator."""


class ConversionError(PaginationError):
    """Cursor parts cannot be converted into the entity's native types.

    Raised by key/order extractors, e.g. when the key is not a valid UUID
    or the order value is not a valid ISO 8601 timestamp.
    """

    def __init__(self, message: str, *, field: str | None = None, value: str | None = None):
        self.field = field
        self.value = value
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details=details)


class IdConversionError(ConversionError):
    """Opaque global identifier does not carry a valid compact UUID token."""


class UnderlyingQueryError(PaginationError):
    """The sorted-range reader failed.

    The original exception is always chained as ``__cause__``.
    """

    def __init__(self, message: str, *, model: str | None = None):
        details = {"model": model} if model else {}
        super().__init__(message, details=details)


__all__ = [
    "ConversionError",
    "CursorDecodeError",
    "CursorEncodingError",
    "CursorError",
    "IdConversionError",
    "InvalidCursorFormat",
    "PaginationError",
    "UnderlyingQueryError",
]
