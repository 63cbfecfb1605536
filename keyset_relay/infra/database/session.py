"""Async engine and session factory.

Both are built once at startup from explicit settings and injected where
needed; there is no module-level engine.

Example:
    engine = create_engine(get_db_settings())
    sessions = create_session_factory(engine)

    async with session_scope(sessions) as session:
        page = await todo_repo.paginate_cursor(session, first=20)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

    from keyset_relay.core.settings.database import DatabaseSettings

logger = logging.getLogger(__name__)


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    engine = create_async_engine(settings.url, echo=settings.echo)
    logger.info(
        "Database engine created",
        extra={"host": settings.host, "database": settings.name, "driver": engine.dialect.name},
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide a session that commits on success and rolls back on error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


__all__ = ["create_engine", "create_session_factory", "session_scope"]
