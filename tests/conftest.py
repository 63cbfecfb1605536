"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine and session
    - Model Fixtures: the ``Todo`` model and a five-row keyset fixture
    - Utility Fixtures: extractor and settings helpers

The five todos share timestamps on purpose: TODO_1, TODO_2 and TODO_3 were
created in the same millisecond, so their order is decided by ``id`` alone.
Ascending ``(created_at, id)`` order is TODO_2, TODO_3, TODO_1, TODO_4, TODO_5.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from keyset_relay.core.database.base import Base
from keyset_relay.core.pagination import CursorCodec, UuidTimestampExtractor
from keyset_relay.core.settings import clear_all_caches
from tests.models import TODO_ROWS, Todo

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests run without external infrastructure
os.environ.setdefault("LOG_JSON_LOGS", "false")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create async database session with table creation and cleanup.

    Yields:
        Async database session for testing.
    """
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Model Fixtures
# ============================================================================


@pytest.fixture
async def todos(db_session: AsyncSession) -> dict[str, Todo]:
    """Insert the five fixture todos.

    Returns:
        Mapping of fixture name (``"TODO_1"`` ...) to persisted instance.
    """
    rows = {
        name: Todo(id=uuid.UUID(id_), text=text, is_done=is_done, created_at=created_at)
        for name, (id_, text, is_done, created_at) in TODO_ROWS.items()
    }
    db_session.add_all(rows.values())
    await db_session.commit()
    return rows


# ============================================================================
# Utility Fixtures
# ============================================================================


@pytest.fixture
def extractor() -> UuidTimestampExtractor:
    return UuidTimestampExtractor()


@pytest.fixture
def cursor_of(extractor: UuidTimestampExtractor):
    """Return a function computing the cursor of a row."""

    def _cursor_of(row: object) -> str:
        return CursorCodec.encode(*extractor.to_cursor_parts(row))

    return _cursor_of


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Reload settings from the environment for every test."""
    clear_all_caches()
    yield
    clear_all_caches()
