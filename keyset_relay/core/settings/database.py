"""Database connection settings.

Environment variables use DB_ prefix.
Example: DB_HOST=localhost, DB_USER=root, DB_PASSWORD=secret, DB_NAME=todos

Supports two configuration modes:
1. Full DSN: DB_DATABASE_URL="sqlite+aiosqlite:///:memory:"
2. Components: DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME
"""

from __future__ import annotations

from urllib.parse import quote_plus

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational store connection settings.

    The database name is optional: a URL without one is what admin tasks
    (creating or dropping the database itself) connect with.
    """

    dsn: str | None = Field(
        default=None,
        alias="DB_DATABASE_URL",
        description="Complete SQLAlchemy URL; overrides the component fields",
    )

    # ─────────────────────────────────────────────────────
    # Connection Parameters (components)
    # ─────────────────────────────────────────────────────
    driver: str = Field(
        default="postgresql+psycopg",
        min_length=1,
        description="SQLAlchemy dialect+driver scheme",
    )
    host: str = Field(
        default="localhost",
        min_length=1,
        max_length=255,
        description="Database server hostname or IP address.",
    )
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = Field(default="root", min_length=1, max_length=100)
    password: SecretStr = Field(default=SecretStr("root"))
    name: str | None = Field(
        default=None,
        max_length=100,
        description="Database name (None connects to the server default)",
    )

    echo: bool = Field(default=False, description="Echo SQL statements")

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @computed_field(repr=False)  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        """SQLAlchemy database URL built from the component fields."""
        if self.dsn:
            return self.dsn

        safe_password = quote_plus(self.password.get_secret_value())
        base = f"{self.driver}://{self.user}:{safe_password}@{self.host}:{self.port}"
        if self.name:
            return f"{base}/{self.name}"
        return base

    def without_name(self) -> DatabaseSettings:
        """Same server and credentials, no database selected."""
        return self.model_copy(update={"name": None, "dsn": None})
