"""Tests for lazy logging, the JSON formatter and logging configuration."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from keyset_relay.core.settings import LoggingSettings
from keyset_relay.infra.logging import (
    JSONFormatter,
    LazyLoggerAdapter,
    configure_logging,
    get_lazy_logger,
    setup_logging,
)
from keyset_relay.infra.logging import config as logging_config


@pytest.fixture
def restore_root_logger(monkeypatch: pytest.MonkeyPatch):
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    monkeypatch.setattr(logging_config, "_LOGGING_INITIALIZED", False)
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("keyset_relay.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLazyLogger:
    def test_returns_adapter_with_context(self) -> None:
        lazy = get_lazy_logger("keyset_relay.test.lazy", component="paginator")

        assert isinstance(lazy, LazyLoggerAdapter)
        assert lazy.extra == {"component": "paginator"}

    def test_callable_not_invoked_when_disabled(self) -> None:
        lazy = get_lazy_logger("keyset_relay.test.disabled")
        lazy.logger.setLevel(logging.INFO)
        calls = []

        lazy.debug(lambda: calls.append("msg") or "expensive")

        assert calls == []

    def test_callable_invoked_when_enabled(self, caplog: pytest.LogCaptureFixture) -> None:
        lazy = get_lazy_logger("keyset_relay.test.enabled")

        with caplog.at_level(logging.DEBUG, logger="keyset_relay.test.enabled"):
            lazy.debug(lambda: "page built")
            lazy.info("rows=%s", lambda: 3)

        assert [r.getMessage() for r in caplog.records] == ["page built", "rows=3"]

    def test_context_merged_into_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        lazy = get_lazy_logger("keyset_relay.test.context", entity="Todo", operation="paginate")

        with caplog.at_level(logging.DEBUG, logger="keyset_relay.test.context"):
            lazy.debug(lambda: "page built", extra={"operation": "override"})

        record = caplog.records[0]
        assert record.entity == "Todo"
        assert record.operation == "override"

    def test_records_point_at_the_caller(self, caplog: pytest.LogCaptureFixture) -> None:
        lazy = get_lazy_logger("keyset_relay.test.caller")

        with caplog.at_level(logging.INFO, logger="keyset_relay.test.caller"):
            lazy.info("hello")

        assert caplog.records[0].funcName == "test_records_point_at_the_caller"

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        lazy = get_lazy_logger("keyset_relay.test.exc")

        with caplog.at_level(logging.ERROR, logger="keyset_relay.test.exc"):
            try:
                raise ValueError("bad")
            except ValueError:
                lazy.exception("failed")

        assert caplog.records[0].exc_info is not None


class TestJSONFormatter:
    def test_basic_fields(self) -> None:
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "keyset_relay.test"
        assert data["message"] == "hello"
        assert data["timestamp"].endswith("Z")
        assert "trace_id" not in data

    def test_static_and_extra_fields(self) -> None:
        formatter = JSONFormatter(static={"service": "keyset-relay"})

        data = json.loads(formatter.format(make_record(operation="db.fetch_range", rows=3)))

        assert data["service"] == "keyset-relay"
        assert data["operation"] == "db.fetch_range"
        assert data["rows"] == 3
        assert "pathname" not in data

    def test_exception_is_single_line(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]

    def test_non_serializable_extra_uses_str(self) -> None:
        data = json.loads(JSONFormatter().format(make_record(model=object)))

        assert data["model"] == str(object)


class TestConfigureLogging:
    def test_sets_root_level_and_console_handler(self, restore_root_logger) -> None:
        configure_logging(log_level="warning", json_logs=False)

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)

    def test_json_console_formatter(self, restore_root_logger) -> None:
        configure_logging(json_logs=True, service_name="svc")

        formatter = restore_root_logger.handlers[0].formatter
        assert isinstance(formatter, JSONFormatter)
        assert formatter.static == {"service": "svc"}

    def test_file_handler_writes_json(self, restore_root_logger, tmp_path) -> None:
        log_file = tmp_path / "logs" / "app.log"
        configure_logging(log_level="INFO", file_path=log_file, json_logs=False)

        logging.getLogger("keyset_relay.test.file").info("written", extra={"page": 1})
        for handler in restore_root_logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        data = json.loads(line)
        assert data["message"] == "written"
        assert data["page"] == 1

    def test_setup_logging_runs_once(self, restore_root_logger) -> None:
        setup_logging(LoggingSettings(_env_file=None, level="ERROR", json_logs=False))
        setup_logging(LoggingSettings(_env_file=None, level="DEBUG", json_logs=False))

        assert restore_root_logger.level == logging.ERROR

    def test_setup_logging_force(self, restore_root_logger) -> None:
        setup_logging(LoggingSettings(_env_file=None, level="ERROR", json_logs=False))
        setup_logging(
            LoggingSettings(_env_file=None, level="DEBUG", json_logs=False),
            force=True,
        )

        assert restore_root_logger.level == logging.DEBUG
