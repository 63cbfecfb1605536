"""Declarative base and mixins for keyset-paginated models.

Keyset pagination needs a unique key and an order column on every table it
pages over. ``UUIDPKMixin`` and ``TimestampMixin`` supply the pair the
default extractor expects (``id`` and ``created_at``).

Example:
    class Todo(Base, UUIDPKMixin, TimestampMixin):
        __tablename__ = "todos"
        text: Mapped[str] = mapped_column(String(255))
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with automatic table naming.

    Models may set ``__typename__`` to name the entity in global
    identifiers; the class name is used otherwise.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class UUIDPKMixin:
    """UUID v4 primary key.

    Provides:
        id: UUID v4 primary key (random), used as the keyset tie-breaker
    """

    __allow_unmapped__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        comment="UUID v4 primary key",
    )


class TimestampMixin:
    """Creation timestamp used as the default keyset order column.

    Provides:
        created_at: Timestamp of record creation (immutable)

    Also declares a composite ``(created_at, id)`` index so the seek
    predicate and ordering are served by a single index scan.
    """

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record creation",
    )

    @declared_attr.directive
    def __table_args__(cls) -> tuple[Index, ...]:
        return (Index(f"ix_{cls.__tablename__}_keyset", "created_at", "id"),)


__all__ = ["NAMING_CONVENTION", "Base", "TimestampMixin", "UUIDPKMixin"]
