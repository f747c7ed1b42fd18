"""Focused tests for vertex_providers.base.logging.

Covers level parsing, logger namespacing, normalized event keys, the JSON
formatter and the managed file handler.
"""
from __future__ import annotations

import json
import logging

from vertex_providers.base.log_support import JsonFormatter, LogContext
from vertex_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_loggers_live_under_base_namespace():
    assert get_logger("credentials").name == f"{BASE_LOGGER_NAME}.credentials"
    assert get_logger("vertex_providers.vertex").name == "vertex_providers.vertex"
    base = logging.getLogger(BASE_LOGGER_NAME)
    assert base.propagate is False
    assert len([h for h in base.handlers if isinstance(h, logging.StreamHandler)]) >= 1


def test_level_follows_environment(monkeypatch):
    monkeypatch.setenv("VERTEX_PROVIDERS_LOG_LEVEL", "ERROR")
    assert get_logger().level == logging.ERROR
    monkeypatch.delenv("VERTEX_PROVIDERS_LOG_LEVEL")
    assert get_logger().level == logging.INFO


def test_normalized_log_event_emits_required_keys(log_events):
    logger = get_logger("tests.logging")
    normalized_log_event(
        logger,
        "stream.adapter.end",
        LogContext(provider="p", model="m", location="us-east5"),
        phase="finalize",
        emitted=True,
        tokens={"prompt": 10, "completion": 5},
        phase_shadow=None,
        metrics={"emitted": 3},
    )
    (event,) = log_events.named("stream.adapter.end")
    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            continue
        assert key in event
    assert "error_code" not in event
    assert "phase_shadow" not in event
    assert event["provider"] == "p" and event["location"] == "us-east5"
    assert event["tokens"] == {"prompt": 10, "completion": 5}
    assert event["metrics"] == {"emitted": 3}


def test_extra_fields_never_override_normalized_values(log_events):
    normalized_log_event(get_logger("tests.logging"), "x.y", phase="start", attempt=2, error_code="timeout", emitted=False)
    (event,) = log_events.named("x.y")
    assert event["attempt"] == 2
    assert event["error_code"] == "timeout"


def test_log_event_respects_level(log_events):
    logger = get_logger("tests.logging")
    log_event(logger, "quiet", level=logging.DEBUG, value=None, kept=1)
    (event,) = log_events.named("quiet")
    assert "value" not in event
    assert event["kept"] == 1


def test_json_formatter_hoists_event_payload():
    record = logging.LogRecord("vertex_providers.x", logging.INFO, __file__, 1, json.dumps({"event": "chat.end", "k": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "chat.end"
    assert out["k"] == 1
    assert out["level"] == "INFO"
    assert out["logger"] == "vertex_providers.x"


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "adapter.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("tests.file"), "file.event", level=logging.WARNING, n=1)
        for h in logger.handlers:
            h.flush()
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"
        # Same path again keeps a single managed handler.
        configure_logger(file_path=str(path))
        managed = [h for h in logger.handlers if getattr(h, "baseFilename", None) == str(path)]
        assert len(managed) == 1
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "baseFilename", None)]
