"""Logging configuration settings."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Structured logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=DEBUG, LOG_JSON_LOGS=false
    """

    service_name: str = Field(
        default="keyset-relay",
        description="Service name to include in log records (static field in JSON)",
    )

    level: LogLevel = Field(
        default="INFO",
        description="Root logger level (DEBUG|INFO|WARNING|ERROR|CRITICAL)",
    )

    json_logs: bool = Field(
        default=True,
        description="Enable JSON Lines (JSONL) formatted structured logs",
    )

    log_file: str | None = Field(
        default=None,
        max_length=500,
        description="Log file path (None to disable file logging)",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @property
    def level_int(self) -> int:
        """Get numeric log level."""
        return getattr(logging, self.level, logging.INFO)

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``configure_logging``."""
        return {
            "log_level": self.level,
            "json_logs": self.json_logs,
            "file_path": self.log_file,
            "service_name": self.service_name,
        }
