"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the adapter to abort an
in-flight call. Besides polling (``raise_if_cancelled``) the token can be bound
to an asyncio task; ``cancel`` then interrupts that task at whatever it is
awaiting (HTTP handshake, next stream event), so a cancelled call never hangs
on the network.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from threading import Lock
from typing import Callable, Iterator, List, Optional, Set, Tuple

from .state import State
from .cancelled_error import CancelledError

_TaskEntry = Tuple[asyncio.AbstractEventLoop, "asyncio.Task[object]"]


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage; ``cancel`` may be
    called from another thread than the one running the bound task. Child
    tokens inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._tasks: Set[_TaskEntry] = set()
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, interrupt bound tasks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            tasks = list(self._tasks)
        for entry in tasks:
            self._schedule_task_cancel(entry)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    # asyncio integration ------------------------------------------------
    def bind_task(self, task: "Optional[asyncio.Task[object]]" = None) -> Callable[[], None]:
        """Bind an asyncio task (default: the current one) to this token.

        Returns a callable that unbinds the task. Cancelling the token while
        the task is bound calls ``task.cancel()`` on the task's own loop; the
        task observes an ``asyncio.CancelledError`` at its current await.
        """
        if task is None:
            task = asyncio.current_task()
        if task is None:
            raise RuntimeError("bind_task() requires a running asyncio task")
        entry: _TaskEntry = (task.get_loop(), task)
        with self._lock:
            self._tasks.add(entry)
            already = self._state.cancelled
        if already:
            self._schedule_task_cancel(entry)

        def _unbind() -> None:
            with self._lock:
                self._tasks.discard(entry)

        return _unbind

    @contextmanager
    def bound(self, task: "Optional[asyncio.Task[object]]" = None) -> Iterator["CancellationToken"]:
        """Context manager form of :meth:`bind_task`."""
        unbind = self.bind_task(task)
        try:
            yield self
        finally:
            unbind()

    def _schedule_task_cancel(self, entry: _TaskEntry) -> None:
        loop, _task = entry
        if loop.is_closed():
            return
        loop.call_soon_threadsafe(self._cancel_if_bound, entry)

    def _cancel_if_bound(self, entry: _TaskEntry) -> None:
        # The task may have unbound (finished its call) between cancel() and now.
        with self._lock:
            still_bound = entry in self._tasks
        if still_bound:
            entry[1].cancel(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
