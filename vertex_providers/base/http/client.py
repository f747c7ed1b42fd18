"""HTTP client construction for the Vertex adapter.

Purpose:
    Build ``httpx.AsyncClient`` instances with timeouts derived exclusively
    from :func:`get_timeout_config`, so no call site introduces numeric
    timeout literals.

Lifecycle:
    Calls share no mutable state, so there is no process-wide pool: a
    provider either uses a client injected by its owner (who closes it) or
    opens one per call through :func:`call_client`, closed when the call ends.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from ..timeouts import get_timeout_config


def create_async_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Return a new ``httpx.AsyncClient`` configured with adapter timeouts.

    Parameters:
        transport: Optional transport override (e.g. ``httpx.MockTransport``
            in tests).
    """
    timeout = get_timeout_config().to_httpx()
    if transport is not None:
        return httpx.AsyncClient(timeout=timeout, transport=transport)
    return httpx.AsyncClient(timeout=timeout)


@asynccontextmanager
async def call_client(shared: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``shared`` untouched, or a per-call client closed on exit."""
    if shared is not None:
        yield shared
        return
    async with create_async_client() as client:
        yield client


__all__ = ["create_async_client", "call_client"]
