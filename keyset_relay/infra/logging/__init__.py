"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Processing request")

    # Lazy evaluation for expensive debug output
    from keyset_relay.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Expensive: {compute_heavy_data()}")  # Only runs if DEBUG enabled

    # Configure once at startup
    from keyset_relay.infra.logging import setup_logging

    setup_logging()
"""

from keyset_relay.infra.logging.config import configure_logging, setup_logging
from keyset_relay.infra.logging.formatters import JSONFormatter
from keyset_relay.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
