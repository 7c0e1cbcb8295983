"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

from dubbo_metrics.base.log_support import JsonFormatter
from dubbo_metrics.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("DUBBO_METRICS_LOG_LEVEL", "ERROR")
    logger = get_logger(name="dubbo_metrics.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["msg"] == "fail"


def test_log_event_hoists_payload_and_drops_none(capsys):
    logger = get_logger(name="dubbo_metrics.test.events", json_mode=True)
    ctx = LogContext(scope="dubbo-js", version="0.0.1", role="provider", extra={"host": None, "pid": 7})
    log_event(logger, "collector.shutdown", ctx, level=logging.WARNING, dropped=4, reason=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "collector.shutdown"
    assert data["scope"] == "dubbo-js"
    assert data["role"] == "provider"
    assert data["pid"] == 7
    assert data["dropped"] == 4
    assert "reason" not in data and "host" not in data and "metric" not in data
    assert "msg" not in data


def test_log_event_keep_none(capsys):
    logger = get_logger(name="dubbo_metrics.test.none", json_mode=True)
    log_event(logger, "registry.shutdown", keep_none=True, level=logging.WARNING, error=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert "error" in data and data["error"] is None


def test_log_event_below_level_is_skipped(capsys):
    logger = get_logger(name="dubbo_metrics.test.quiet", json_mode=True)
    log_event(logger, "registry.handle_created", level=logging.DEBUG)
    assert capsys.readouterr().err == ""


def test_json_formatter_keeps_plain_messages() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="dubbo_metrics.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="plain %s",
        args=("text",),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["msg"] == "plain text"
    assert payload["logger"] == "dubbo_metrics.test.json"


def test_child_logger_uses_parent_handler_without_duplicates() -> None:
    logger = get_logger(name="dubbo_metrics.test.child", json_mode=False)
    base_logger = logging.getLogger("dubbo_metrics")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(base_logger.level)
    base_logger.handlers[:] = [handler]

    logger.info("alpha")
    handler.flush()
    lines = [ln for ln in stream.getvalue().splitlines() if ln]
    assert lines == ["alpha"]
    # restore a managed console handler for later tests
    base_logger.handlers[:] = []
    setattr(base_logger, "_dubbo_metrics_logger_initialized", False)
    get_logger()


def test_configure_logger_level_and_file_handler(tmp_path) -> None:
    log_file = tmp_path / "logs" / "metrics.log"
    logger = configure_logger(level="WARNING", file_path=str(log_file), json_mode=True)
    try:
        assert logger.level == logging.WARNING
        child = get_logger(name="dubbo_metrics.test.file")
        # get_logger refreshes the level from the environment (INFO default)
        configure_logger(level=logging.WARNING, file_path=str(log_file))
        child.info("hidden")
        log_event(child, "observable.shutdown", level=logging.ERROR, service_name="greeter")
        for h in logger.handlers:
            h.flush()
        lines = [json.loads(ln) for ln in log_file.read_text(encoding="utf-8").splitlines() if ln]
        assert [ln["event"] for ln in lines] == ["observable.shutdown"]
        file_handlers = [h for h in logger.handlers if getattr(h, "_dubbo_metrics_file_handler", False)]
        assert len(file_handlers) == 1
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "_dubbo_metrics_file_handler", False)]
