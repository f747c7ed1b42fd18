"""Streaming call path for the Vertex provider.

Purpose:
- Open the ``streamRawPredict`` connection with ``stream: true`` and hand the
  response to a fresh :class:`StreamInterpreter`.

Notes:
- Every call gets its own interpreter, metrics and (unless the provider was
  given a shared client) its own ``httpx.AsyncClient``.
- The connection is released when the interpreter reaches a terminal state,
  including when it stops early on ``[DONE]``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.http import call_client
from ..base.logging import normalized_log_event
from ..base.streaming import ProgressCallback, StreamInterpreter, run_stream

EVENT_STREAM_ACCEPT = "text/event-stream"


def make_stream_opener(provider, body: Mapping[str, Any], headers: Mapping[str, str]):
    """Return a zero-argument opener yielding the streamed ``httpx.Response``."""
    request_headers = {"Accept": EVENT_STREAM_ACCEPT, **headers}

    @asynccontextmanager
    async def _open() -> AsyncIterator[httpx.Response]:
        async with call_client(provider.http_client) as client:
            async with client.stream(
                "POST", provider.endpoint_url, json=dict(body), headers=request_headers
            ) as response:
                yield response

    return _open


async def stream_chat(
    provider,
    body: Mapping[str, Any],
    headers: Mapping[str, str],
    on_progress: ProgressCallback,
    token: Optional[CancellationToken] = None,
) -> StreamInterpreter:
    """Run one streamed call and return its finished interpreter.

    ``on_progress`` receives the fragments and exactly one ``"[DONE]"`` on
    success. Errors and cancellation propagate as described in
    :func:`vertex_providers.base.streaming.run_stream`.
    """
    ctx = provider.log_context()
    interpreter = StreamInterpreter(
        on_progress=on_progress,
        provider_name=provider.provider_name,
        model=provider.model,
        logger=provider.logger,
        ctx=ctx,
        cancellation_token=token,
    )
    normalized_log_event(provider.logger, "stream.start", ctx, phase="start", emitted=False)
    await run_stream(interpreter, make_stream_opener(provider, body, headers), token)
    return interpreter


__all__ = ["EVENT_STREAM_ACCEPT", "make_stream_opener", "stream_chat"]
