"""Logging configuration setup.

Configures the root logger with ``logging.config.dictConfig``:
- JSONL format for machine parsing (Loki-ready) or plain text for local runs
- Console handler on stderr, optional rotating file handler
- Application loggers propagate to root
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from keyset_relay.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from keyset_relay.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    file_path: str | Path | None = None,
    json_logs: bool = True,
    service_name: str | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
) -> None:
    """Configure the root logger.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_path: Path to log file. None disables file logging.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        service_name: Static ``service`` field added to JSON records.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.

    Example:
        from keyset_relay.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    formatter_name = "json" if json_logs else "text"

    formatters: dict[str, Any] = {
        "text": {"format": TEXT_FORMAT},
        "json": {
            "()": "keyset_relay.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name} if service_name else None,
        },
    }

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": formatter_name,
            "stream": "ext://sys.stderr",
        },
    }

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json",
            "filename": str(path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": handlers,
            "root": {"level": log_level.upper(), "handlers": list(handlers)},
        }
    )
    logger.debug("Logging configured", extra={"level": log_level, "json": json_logs})
