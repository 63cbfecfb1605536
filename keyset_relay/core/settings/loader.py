"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process. Construct them at startup and pass them down explicitly; nothing in
the pagination engine reads the environment on its own.

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()

    Or override with custom values:
    settings = PaginationSettings(default_limit=10)
"""

from __future__ import annotations

from functools import lru_cache

from .database import DatabaseSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings.

    Returns:
        Validated and frozen DatabaseSettings instance.
    """
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


def clear_all_caches() -> None:
    """Clear all settings caches (useful for testing)."""
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_pagination_settings.cache_clear()
