"""Shared fixtures for the vertex_providers test suite.

Provides environment isolation, structured log capture on the shared adapter
logger, SSE body builders and a provider factory wired to ``httpx`` mock
transports and static credentials.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import httpx
import pytest

from vertex_providers.base.logging import BASE_LOGGER_NAME, LOG_LEVEL_ENV, get_logger
from vertex_providers.base.timeouts import reset_timeout_config
from vertex_providers.config import reset_config_cache
from vertex_providers.vertex import StaticCredentialProvider, VertexClaudeProvider

_ENV_VARS = (
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_REGION",
    "VERTEX_LOCATION",
    "VERTEX_MODEL",
    "VERTEX_CACHE_NAMESPACE",
    "VERTEX_ANTHROPIC_VERSION",
    "VERTEX_PROVIDERS_CONFIG_FILE",
    "VERTEX_PROVIDERS_LOG_LEVEL",
    "VERTEX_TIMEOUT_CONNECT_SECONDS",
    "VERTEX_TIMEOUT_STREAM_SECONDS",
    "VERTEX_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against built-in defaults only."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    reset_timeout_config()
    yield
    reset_config_cache()
    reset_timeout_config()


class _EventCollector(logging.Handler):
    """Collect ``log_event`` payloads emitted on the shared adapter logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"event": None, "msg": record.getMessage()}
        payload["_level"] = record.levelno
        self.events.append(payload)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]

    def names(self) -> List[str]:
        return [e.get("event") for e in self.events]


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[_EventCollector]:
    """Capture structured events at DEBUG and above.

    The adapter logger does not propagate to root, so the collector is attached
    to it directly. The level comes from the environment because every
    ``get_logger`` call re-applies it.
    """
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    previous = logger.level
    collector = _EventCollector()
    logger.addHandler(collector)
    logger.setLevel(logging.DEBUG)
    try:
        yield collector
    finally:
        logger.removeHandler(collector)
        logger.setLevel(previous)


def _frame(payload: Any, event: Optional[str] = None) -> str:
    data = payload if isinstance(payload, str) else json.dumps(payload)
    head = f"event: {event}\n" if event else ""
    return f"{head}data: {data}\n\n"


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    """Build a ``text/event-stream`` body.

    Each positional item is a payload (dict or raw string) or an
    ``(event_name, payload)`` tuple.
    """

    def _build(*frames: Any) -> bytes:
        parts = []
        for item in frames:
            if isinstance(item, tuple):
                parts.append(_frame(item[1], event=item[0]))
            else:
                parts.append(_frame(item))
        return "".join(parts).encode("utf-8")

    return _build


class Recorder:
    """Progress callback that records everything it receives."""

    def __init__(self) -> None:
        self.items: List[Any] = []

    def __call__(self, item: Any) -> None:
        self.items.append(item)

    @property
    def done_count(self) -> int:
        return sum(1 for i in self.items if i == "[DONE]")


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def make_provider() -> Callable[..., VertexClaudeProvider]:
    """Factory: provider bound to ``client`` with a static token."""

    def _make(client: httpx.AsyncClient, token: str = "test-token", **kwargs: Any) -> VertexClaudeProvider:
        kwargs.setdefault("project_id", "proj-1")
        kwargs.setdefault("location", "us-east5")
        return VertexClaudeProvider(
            credentials=StaticCredentialProvider(token),
            http_client=client,
            **kwargs,
        )

    return _make
