"""Stream event interpreter: the state machine behind a streamed call.

The interpreter owns one streamed call from the HTTP handshake to its terminal
state::

    OPENING -> STREAMING -> {COMPLETED, ABORTED, FAILED}

Every state change goes through ``_transition``, which refuses to leave a
terminal state. Completion is therefore delivered at most once whether it is
triggered by the ``[DONE]`` sentinel or by the server closing the connection
without sending it.

Progress is reported through a single callback (sync or async) receiving, in
source order: ``str`` fragments of batch outputs, decoded ``dict`` payloads of
delta / content-block events, and finally ``"[DONE]"``.

Failure surfaces:
    - non-200 at open: ``ConnectionOpenError`` with status and body;
    - transport failure before the response: ``ConnectionOpenError``;
    - transport failure mid-stream: ``MidStreamTransportError`` wrapping the
      original exception;
    - malformed payload: logged, counted, stream continues;
    - cancellation token: ``CancelledError`` (ABORTED), never a provider error.
"""
from __future__ import annotations

import asyncio
import inspect
import json
import logging
import time
from contextlib import AbstractAsyncContextManager
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import (
    ConnectionOpenError,
    ErrorCode,
    FrameParseError,
    MidStreamTransportError,
    ProviderError,
    RETRYABLE_CODES,
    classify_exception,
)
from ..logging import LogContext, normalized_log_event
from .event_stream import DONE_SENTINEL, StreamEvent, aiter_events
from .payloads import PayloadKind, classify_payload
from .stream_state import TRANSITIONS, StreamState
from .streaming_metrics import StreamMetrics

ProgressCallback = Callable[[Any], Union[None, Awaitable[None]]]
StreamOpener = Callable[[], AbstractAsyncContextManager[httpx.Response]]


async def _read_error_body(response: httpx.Response) -> Optional[str]:
    """Best-effort read of an error response body; ``None`` if unreadable."""
    try:
        await response.aread()
        return response.text
    except (httpx.HTTPError, UnicodeDecodeError):
        return None


class StreamInterpreter:
    """Drive one streamed call through its lifecycle.

    Instances are single-use and hold no state shared with other calls.
    """

    def __init__(
        self,
        *,
        on_progress: ProgressCallback,
        provider_name: str,
        model: str,
        logger: logging.Logger,
        ctx: Optional[LogContext] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self._on_progress = on_progress
        self.provider_name = provider_name
        self.model = model
        self._logger = logger
        self.ctx = ctx or LogContext(provider=provider_name, model=model)
        self._token = cancellation_token
        self._state = StreamState.OPENING
        self._completion_trigger: Optional[str] = None
        self.metrics = StreamMetrics()
        self._t0 = time.perf_counter()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def completion_trigger(self) -> Optional[str]:
        """``"sentinel"`` or ``"connection_closed"`` once COMPLETED, else ``None``."""
        return self._completion_trigger

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def _transition(self, new_state: StreamState) -> bool:
        """Move to ``new_state``; return False if already terminal."""
        if self._state.is_terminal:
            return False
        if new_state not in TRANSITIONS[self._state]:
            raise RuntimeError(f"illegal stream transition {self._state.value} -> {new_state.value}")
        self._state = new_state
        if new_state.is_terminal:
            self.metrics.total_duration_ms = self._elapsed_ms()
        return True

    async def _deliver(self, item: Any) -> None:
        result = self._on_progress(item)
        if inspect.isawaitable(result):
            await result

    async def _emit(self, fragment: Any) -> None:
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_token_ms = self._elapsed_ms()
        self.metrics.emitted += 1
        await self._deliver(fragment)

    # Lifecycle ----------------------------------------------------------
    async def open(self, response: httpx.Response) -> None:
        """Handle the handshake response: 200 streams, anything else fails."""
        if response.status_code == 200:
            self._transition(StreamState.STREAMING)
            normalized_log_event(
                self._logger,
                "stream.open",
                self.ctx,
                phase="start",
                http_status=response.status_code,
            )
            return
        body = await _read_error_body(response)
        err = ConnectionOpenError.from_http_response(
            response.status_code, body, provider=self.provider_name, model=self.model
        )
        self.fail(err)
        raise err

    async def feed(self, event: StreamEvent) -> None:
        """Process one event; inert unless the state is STREAMING."""
        if self._state is not StreamState.STREAMING:
            return
        if self._token is not None:
            self._token.raise_if_cancelled()
        if event.is_heartbeat:
            self.metrics.heartbeats += 1
            return
        if not event.data:
            return
        if event.is_done:
            await self.complete("sentinel")
            return
        try:
            decoded = json.loads(event.data)
        except ValueError as exc:
            self._record_parse_error(event.data, exc)
            return
        parsed = classify_payload(decoded)
        if parsed.kind is PayloadKind.BATCH_OUTPUTS:
            text = parsed.batch_text()
            if text is None:
                normalized_log_event(
                    self._logger,
                    "stream.payload.empty_output",
                    self.ctx,
                    phase="mid_stream",
                    level=logging.DEBUG,
                )
                return
            await self._emit(text)
        elif parsed.kind in (PayloadKind.DELTA, PayloadKind.CONTENT_BLOCK):
            await self._emit(parsed.data)
        else:
            self.metrics.unrecognized += 1
            payload_type = parsed.data.get("type") if isinstance(parsed.data, dict) else type(parsed.data).__name__
            normalized_log_event(
                self._logger,
                "stream.payload.unrecognized",
                self.ctx,
                phase="mid_stream",
                level=logging.DEBUG if parsed.is_lifecycle() else logging.WARNING,
                payload_type=payload_type,
            )

    async def complete(self, trigger: str) -> bool:
        """Enter COMPLETED and deliver ``"[DONE]"``; no-op when already terminal."""
        if not self._transition(StreamState.COMPLETED):
            return False
        self._completion_trigger = trigger
        normalized_log_event(
            self._logger,
            "stream.adapter.end",
            self.ctx,
            phase="finalize",
            emitted=self.metrics.emitted > 0,
            trigger=trigger,
            metrics=self.metrics.to_dict(),
        )
        await self._deliver(DONE_SENTINEL)
        return True

    def fail(self, exc: Exception) -> None:
        """Enter FAILED and log the error; no-op when already terminal."""
        if not self._transition(StreamState.FAILED):
            return
        code = exc.code if isinstance(exc, ProviderError) else classify_exception(exc)
        normalized_log_event(
            self._logger,
            "stream.adapter.error",
            self.ctx,
            phase="finalize",
            level=logging.ERROR,
            error_code=code.value,
            emitted=self.metrics.emitted > 0,
            http_status=getattr(exc, "http_status", None),
            error=str(exc)[:260],
            metrics=self.metrics.to_dict(),
        )

    def abort(self, reason: Optional[str] = None) -> CancelledError:
        """Enter ABORTED and return the error the caller should raise."""
        message = reason or "Request aborted"
        if self._transition(StreamState.ABORTED):
            normalized_log_event(
                self._logger,
                "stream.aborted",
                self.ctx,
                phase="finalize",
                error_code=ErrorCode.CANCELLED.value,
                emitted=self.metrics.emitted > 0,
                reason=message,
            )
        return CancelledError(message)

    def _record_parse_error(self, payload: str, exc: ValueError) -> None:
        self.metrics.parse_errors += 1
        err = FrameParseError.build(payload, exc, provider=self.provider_name, model=self.model)
        normalized_log_event(
            self._logger,
            "stream.frame.parse_error",
            self.ctx,
            phase="mid_stream",
            level=logging.WARNING,
            error_code=err.code.value,
            error=err.message,
            raw_data=payload[:500],
        )

    async def consume(self, response: httpx.Response) -> None:
        """Open on ``response`` and process its events until a terminal state."""
        await self.open(response)
        try:
            async for event in aiter_events(response.aiter_lines()):
                await self.feed(event)
                if self._state.is_terminal:
                    break
        except httpx.HTTPError as exc:
            err = MidStreamTransportError.wrap(exc, provider=self.provider_name, model=self.model)
            self.fail(err)
            raise err from exc
        except (CancelledError, asyncio.CancelledError):
            raise
        except Exception as exc:
            self.fail(exc)
            raise
        # Server closed without the sentinel: still a normal completion.
        await self.complete("connection_closed")


async def run_stream(
    interpreter: StreamInterpreter,
    open_stream: StreamOpener,
    cancellation_token: Optional[CancellationToken] = None,
) -> None:
    """Run ``interpreter`` over the response produced by ``open_stream``.

    The current task is bound to ``cancellation_token`` for the whole call, so
    cancelling it interrupts the handshake or the wait for the next event.

    Raises:
        CancelledError: the token was cancelled before completion.
        ConnectionOpenError: non-200 status or failure to connect.
        MidStreamTransportError: transport failure after the open.
        asyncio.CancelledError: the task was cancelled by someone else.
    """
    unbind = cancellation_token.bind_task() if cancellation_token is not None else None
    try:
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        async with open_stream() as response:
            await interpreter.consume(response)
    except CancelledError as exc:
        raise interpreter.abort(str(exc)) from None
    except asyncio.CancelledError:
        if cancellation_token is None or not cancellation_token.cancelled:
            interpreter.abort("task cancelled")
            raise
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            task.uncancel()
        if interpreter.state is StreamState.COMPLETED:
            return
        raise interpreter.abort(cancellation_token.reason) from None
    except httpx.HTTPError as exc:
        if interpreter.state is StreamState.OPENING:
            code = classify_exception(exc)
            err: ProviderError = ConnectionOpenError(
                code=code,
                message=f"Failed to send message. {exc}",
                provider=interpreter.provider_name,
                model=interpreter.model,
                retryable=code in RETRYABLE_CODES,
                raw=exc,
            )
        else:
            err = MidStreamTransportError.wrap(exc, provider=interpreter.provider_name, model=interpreter.model)
        interpreter.fail(err)
        raise err from exc
    finally:
        if unbind is not None:
            unbind()


__all__ = ["ProgressCallback", "StreamOpener", "StreamInterpreter", "run_stream"]
