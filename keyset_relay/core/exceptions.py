"""Application exceptions and mapping of engine errors to them.

Follows RFC 7807 Problem Details: each exception carries the HTTP status
code, a human-readable detail and a problem ``type``. The pagination engine
itself never raises these; callers translate engine errors with
``to_app_exception`` at the API boundary, so a malformed cursor becomes a
client error rather than a server fault.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from keyset_relay.core.database.exceptions import NotFoundError
from keyset_relay.core.pagination.errors import (
    ConversionError,
    CursorError,
    PaginationError,
)


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=404,
            detail="Todo not found",
            type="todo-not-found",
            extra={"todo_id": "abc123"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")

    def to_problem(self) -> dict[str, Any]:
        """Render as an RFC 7807 problem details body."""
        return {
            "type": self.type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
            **self.extra,
        }


class BadRequestException(AppException):
    """Malformed client input, such as an undecodable cursor."""

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code=400, detail=detail, type=type, extra=extra)


class NotFoundException(AppException):
    """Requested entity does not exist."""

    def __init__(
        self,
        detail: str = "Not Found",
        type: str = "not-found",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code=404, detail=detail, type=type, extra=extra)


class ValidationException(AppException):
    """Input is well-formed but fails validation."""

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            extra=extra,
        )


class InternalServerException(AppException):
    """Unexpected failure; details are not exposed to the client."""

    def __init__(self, type: str = "internal-server-error") -> None:
        super().__init__(status_code=500, detail="Internal Server Error", type=type)


def to_app_exception(error: Exception) -> AppException:
    """Map an engine or repository error to its API-facing exception.

    - Cursor and conversion errors are the client's fault (400)
    - Out-of-range arguments (e.g. negative ``first``) are 422
    - Missing entities are 404
    - Reader failures and anything unknown are 500, without details

    Example:
        try:
            page = await paginator.paginate(reader, args)
        except PaginationError as e:
            raise to_app_exception(e) from e
    """
    if isinstance(error, AppException):
        return error
    if isinstance(error, PydanticValidationError):
        return ValidationException(
            detail="Invalid pagination arguments",
            extra={"errors": error.errors(include_url=False)},
        )
    if isinstance(error, CursorError):
        return BadRequestException(
            detail=error.message, type="invalid-cursor", extra={"error": type(error).__name__}
        )
    if isinstance(error, ConversionError):
        return BadRequestException(
            detail=error.message, type="invalid-cursor-value", extra=dict(error.details)
        )
    if isinstance(error, NotFoundError):
        extra = {"model": error.model_name}
        if error.global_id is not None:
            extra["id"] = error.global_id
        return NotFoundException(detail=f"{error.model_name} not found", extra=extra)
    if isinstance(error, PaginationError):
        return InternalServerException(type="query-failed")
    return InternalServerException()


__all__ = [
    "AppException",
    "BadRequestException",
    "InternalServerException",
    "NotFoundException",
    "ValidationException",
    "to_app_exception",
]
