"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from keyset_relay.core.settings import get_pagination_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables (production)
    3. .env file (development only)
"""

from __future__ import annotations

from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_caches",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
