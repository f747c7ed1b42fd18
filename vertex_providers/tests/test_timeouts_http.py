from __future__ import annotations

import httpx
import pytest

from vertex_providers.base.http import call_client, create_async_client
from vertex_providers.base.timeouts import TimeoutConfig, get_timeout_config, reset_timeout_config

pytestmark = pytest.mark.asyncio


async def test_defaults_and_httpx_mapping():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()
    timeout = cfg.to_httpx()
    assert timeout.connect == 30.0
    assert timeout.read == 300.0


async def test_environment_overrides_and_invalid_values(monkeypatch):
    monkeypatch.setenv("VERTEX_TIMEOUT_CONNECT_SECONDS", "5")
    monkeypatch.setenv("VERTEX_TIMEOUT_STREAM_SECONDS", "-1")
    monkeypatch.setenv("VERTEX_TIMEOUT_HTTP_SECONDS", "abc")
    reset_timeout_config()
    cfg = get_timeout_config()
    assert cfg.connect_timeout_seconds == 5.0
    assert cfg.stream_timeout_seconds == 60.0
    assert cfg.http_timeout_seconds == 300.0
    assert get_timeout_config() is cfg


async def test_create_async_client_applies_timeouts():
    transport = httpx.MockTransport(lambda request: httpx.Response(204))
    async with create_async_client(transport=transport) as client:
        assert client.timeout.connect == 30.0
        assert (await client.get("https://example.test")).status_code == 204


async def test_call_client_shared_is_left_open():
    shared = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
    async with call_client(shared) as client:
        assert client is shared
    assert not shared.is_closed
    await shared.aclose()


async def test_call_client_per_call_is_closed():
    async with call_client(None) as client:
        assert isinstance(client, httpx.AsyncClient)
    assert client.is_closed
