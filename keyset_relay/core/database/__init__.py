"""Core database package: declarative base, mixins and repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - UUIDPKMixin: UUID primary key (keyset tie-breaker)
    - TimestampMixin: created_at order column with a composite keyset index

Repository:
    - BaseRepository[T]: lookups by id or global id, keyset pagination
"""

from keyset_relay.core.database.base import NAMING_CONVENTION, Base, TimestampMixin, UUIDPKMixin
from keyset_relay.core.database.exceptions import NotFoundError, RepositoryError
from keyset_relay.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "NotFoundError",
    "RepositoryError",
    "TimestampMixin",
    "UUIDPKMixin",
]
