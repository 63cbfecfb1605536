"""Repository lookup errors."""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base class for repository failures that are not pagination errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(RepositoryError, LookupError):
    """No row of ``model_name`` matches ``identifier``.

    Attributes:
        model_name: Model class name, e.g. ``"Todo"``
        identifier: Column values that were looked up, e.g. ``{"id": UUID(...)}``
        global_id: Opaque global ID the caller supplied, when the lookup
            started from one. Safe to echo back to clients, unlike ``identifier``.
    """

    def __init__(
        self,
        model_name: str,
        identifier: dict[str, Any],
        *,
        global_id: str | None = None,
    ) -> None:
        self.model_name = model_name
        self.identifier = identifier
        self.global_id = global_id
        keys = ", ".join(f"{k}={v}" for k, v in identifier.items())
        super().__init__(f"{model_name} not found with {keys}")

    def __repr__(self) -> str:
        return (
            f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r}, "
            f"global_id={self.global_id!r})"
        )


__all__ = ["NotFoundError", "RepositoryError"]
