"""Minimal generic repository with keyset pagination.

Example:
    from keyset_relay.core.database import BaseRepository

    todo_repo = BaseRepository(Todo)

    todo = await todo_repo.get_by_global_id(session, global_id)

    page = await todo_repo.paginate_cursor(
        session,
        select(Todo).where(Todo.is_done.is_(False)),
        first=20,
        after=cursor_from_request,
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from keyset_relay.core.database.exceptions import NotFoundError
from keyset_relay.core.pagination import (
    KeysetPaginator,
    OpaqueIdCodec,
    PaginationArgs,
    UuidTimestampExtractor,
)
from keyset_relay.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    import uuid

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from keyset_relay.core.pagination import Connection, KeyOrderExtractor
    from keyset_relay.core.settings.pagination import PaginationSettings


class BaseRepository[T]:
    """Generic repository for UUID-keyed models.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by_global_id(session, global_id) -> T (raises NotFoundError)
        - paginate_cursor(session, statement, first/after/last/before) -> Connection[T]

    Session is always explicit - no hidden state.

    The paginator orders by ``created_at`` and breaks ties by ``id`` unless
    other columns and an extractor for them are given.
    """

    __slots__ = ("_lazy", "_logger", "model", "paginator", "typename")

    def __init__(
        self,
        model: type[T],
        *,
        key_column: Any = None,
        order_column: Any = None,
        extractor: KeyOrderExtractor[Any, Any] | None = None,
        settings: PaginationSettings | None = None,
    ) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Todo)
            key_column: Unique tie-breaker column (default ``model.id``)
            order_column: Ordering column (default ``model.created_at``)
            extractor: Cursor part conversion for those columns
            settings: Pagination defaults and optional page size cap
        """
        self.model = model
        self.typename: str = getattr(model, "__typename__", model.__name__)
        self.paginator: KeysetPaginator[T] = KeysetPaginator(
            key_column if key_column is not None else model.id,  # type: ignore[attr-defined]
            order_column if order_column is not None else model.created_at,  # type: ignore[attr-defined]
            extractor or UuidTimestampExtractor(),
            settings=settings,
            name=model.__name__,
        )
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(__name__, entity=model.__name__)

    async def get(self, session: AsyncSession, id: uuid.UUID) -> T | None:  # noqa: A002
        """Get entity by primary key."""
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: uuid.UUID) -> T:  # noqa: A002
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by_global_id(self, session: AsyncSession, global_id: str) -> T:
        """Resolve an opaque global ID issued for this model.

        Raises:
            CursorError: If the ID envelope is malformed
            IdConversionError: If the ID is malformed or names another type
            NotFoundError: If no such entity exists
        """
        internal_id = OpaqueIdCodec.expect(global_id, self.typename)
        instance = await self.get(session, internal_id)
        if instance is None:
            raise NotFoundError(self.typename, {"id": internal_id}, global_id=global_id)
        return instance

    def global_id(self, instance: T) -> str:
        """Opaque global ID for an instance of this model."""
        return OpaqueIdCodec.to_global_id(self.typename, instance.id)  # type: ignore[attr-defined]

    async def paginate_cursor(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]] | None = None,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
    ) -> Connection[T]:
        """Execute a keyset-paginated query.

        Args:
            session: Database session
            statement: Select without ordering or limit (default: all rows)
            first: Number of items for forward pagination
            after: Cursor for forward pagination (fetch items after this)
            last: Number of items for backward pagination
            before: Cursor for backward pagination (fetch items before this)

        Returns:
            Connection[T] with edges and page_info

        Raises:
            CursorError: If the anchor cursor is malformed
            ConversionError: If the anchor's parts cannot be parsed
            UnderlyingQueryError: If the query fails
        """
        if statement is None:
            statement = select(self.model)

        args = PaginationArgs(first=first, after=after, last=last, before=before)
        return await self.paginator.paginate_statement(session, statement, args)


__all__ = ["BaseRepository"]
