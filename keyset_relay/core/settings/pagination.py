"""Pagination settings.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=40, PAGINATION_MAX_LIMIT=100
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when neither ``first`` nor ``last`` is given.
        max_limit: Optional hard cap on the page size. The engine itself
            enforces no upper bound; deployments opt in by setting this.

    Example:
        settings = PaginationSettings(max_limit=100)
        paginator = KeysetPaginator(Todo.id, Todo.created_at, extractor, settings=settings)
    """

    default_limit: int = Field(
        default=40,
        ge=1,
        le=10000,
        description="Default page size when first/last are not specified",
    )
    max_limit: int | None = Field(
        default=None,
        ge=1,
        description="Maximum allowed page size (None disables the cap)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
