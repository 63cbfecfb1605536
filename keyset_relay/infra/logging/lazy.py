"""Deferred log messages.

The paginator and repository log a line for every page and lookup. Those
lines are debug-only, so their text is passed as a zero-argument callable
and only built when the logger would actually emit the record.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


def _resolve(value: Any) -> Any:
    return value() if callable(value) else value


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that resolves callables lazily and binds context.

    Context given to ``get_lazy_logger`` is merged under each call's own
    ``extra``, so call-site values win and both reach the JSON formatter.

    Example:
        lazy = get_lazy_logger(__name__, entity="Todo")
        lazy.debug(lambda: f"page: {len(page.edges)} edges")
        lazy.info("rows=%s", lambda: count_rows())
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if self.extra:
            kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        msg, kwargs = self.process(_resolve(msg), kwargs)
        kwargs.setdefault("stacklevel", 3)
        self.logger.log(level, msg, *(_resolve(arg) for arg in args), **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a lazy logger, optionally binding ``context`` to every record."""
    return LazyLoggerAdapter(logging.getLogger(name), context)
