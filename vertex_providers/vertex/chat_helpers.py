"""Non-streaming call path and reply extraction for the Vertex provider.

Purpose:
- ``call_once`` sends one POST and returns the provider's JSON document.
- ``extract_replies`` reduces that document to the ordered list of reply
  strings the chat framework stores.

Error mapping:
- status != 200: ``ProviderError`` carrying ``http_status`` plus the body as
  ``error_json`` (when it parses) or ``error_body``;
- transport failure: ``ProviderError`` classified by ``classify_exception``;
- cancellation token: ``CancelledError``;
- a reply document without ``content[0].text`` per candidate:
  ``ProviderContractViolation``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, List, Mapping, Optional, Sequence

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import (
    ErrorCode,
    ProviderContractViolation,
    ProviderError,
    RETRYABLE_CODES,
    classify_exception,
)
from ..base.http import call_client
from ..base.logging import normalized_log_event


def _log_error(provider, ctx, err: ProviderError, started: float) -> None:
    normalized_log_event(
        provider.logger,
        "chat.error",
        ctx,
        phase="finalize",
        level=logging.ERROR,
        error_code=err.code.value,
        emitted=False,
        http_status=err.http_status,
        latency_ms=round((time.perf_counter() - started) * 1000.0, 2),
        error=err.message[:260],
    )


async def call_once(
    provider,
    body: Mapping[str, Any],
    headers: Mapping[str, str],
    token: Optional[CancellationToken] = None,
) -> Any:
    """POST ``body`` to the provider endpoint and return the decoded JSON reply.

    Parameters:
        provider: ``VertexClaudeProvider`` exposing ``endpoint_url``,
            ``http_client``, ``logger``, ``provider_name``, ``model`` and
            ``log_context()``.
        body: Wire body from the request builder (``stream`` false).
        headers: Authorization and content-type headers.
        token: Optional cancellation token, honoured while the request is in
            flight.

    Returns:
        The parsed JSON document, unvalidated.
    """
    ctx = provider.log_context()
    started = time.perf_counter()
    normalized_log_event(provider.logger, "chat.start", ctx, phase="start", emitted=False)
    unbind = token.bind_task() if token is not None else None
    try:
        if token is not None:
            token.raise_if_cancelled()
        async with call_client(provider.http_client) as client:
            response = await client.post(provider.endpoint_url, json=dict(body), headers=dict(headers))
    except asyncio.CancelledError:
        if token is None or not token.cancelled:
            raise
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            task.uncancel()
        raise _aborted(provider, ctx, token.reason) from None
    except CancelledError as exc:
        raise _aborted(provider, ctx, str(exc)) from None
    except httpx.HTTPError as exc:
        code = classify_exception(exc)
        err = ProviderError(
            code=code,
            message=f"Failed to send message. {exc}",
            provider=provider.provider_name,
            model=provider.model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )
        _log_error(provider, ctx, err, started)
        raise err from exc
    finally:
        if unbind is not None:
            unbind()

    if response.status_code != 200:
        err = ProviderError.from_http_response(
            response.status_code, response.text, provider=provider.provider_name, model=provider.model
        )
        _log_error(provider, ctx, err, started)
        raise err
    try:
        result = response.json()
    except ValueError as exc:
        err = ProviderContractViolation(
            code=ErrorCode.INTERNAL,
            message=f"Response body is not JSON: {exc}",
            provider=provider.provider_name,
            model=provider.model,
            raw=exc,
            http_status=response.status_code,
            error_body=response.text,
        )
        _log_error(provider, ctx, err, started)
        raise err from exc
    normalized_log_event(
        provider.logger,
        "chat.end",
        ctx,
        phase="finalize",
        emitted=True,
        http_status=response.status_code,
        latency_ms=round((time.perf_counter() - started) * 1000.0, 2),
    )
    return result


def _aborted(provider, ctx, reason: Optional[str]) -> CancelledError:
    message = reason or "Request aborted"
    normalized_log_event(
        provider.logger,
        "chat.aborted",
        ctx,
        phase="finalize",
        error_code=ErrorCode.CANCELLED.value,
        emitted=False,
        reason=message,
    )
    return CancelledError(message)


def _violation(message: str, exc: Optional[Exception] = None) -> ProviderContractViolation:
    return ProviderContractViolation(
        code=ErrorCode.INTERNAL,
        message=message,
        provider="vertex-anthropic",
        raw=exc,
    )


def _candidates(result: Any) -> Sequence[Any]:
    if isinstance(result, list):
        return result
    if isinstance(result, Mapping):
        outputs = result.get("outputs")
        if isinstance(outputs, list):
            return outputs
        if "content" in result:
            return [result]
    raise _violation(f"Unexpected reply document of type {type(result).__name__}")


def extract_replies(result: Any) -> List[str]:
    """Return ``content[0]["text"]`` of each candidate, in candidate order.

    Accepts a list of candidates, a mapping with an ``outputs`` list, or a
    single Anthropic message (one candidate).

    Raises:
        ProviderContractViolation: when any candidate lacks a non-empty
            ``content`` array whose first element has a string ``text``.
    """
    replies: List[str] = []
    for idx, candidate in enumerate(_candidates(result)):
        try:
            text = candidate["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise _violation(f"Candidate {idx} has no content[0].text", exc) from exc
        if not isinstance(text, str):
            raise _violation(f"Candidate {idx} text is {type(text).__name__}, expected str")
        replies.append(text)
    return replies


__all__ = ["call_once", "extract_replies"]
