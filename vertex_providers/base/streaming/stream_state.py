"""Lifecycle states of one streamed call."""
from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    """``OPENING -> STREAMING -> {COMPLETED, ABORTED, FAILED}``.

    Terminal states are final; no transition leaves them.
    """

    OPENING = "opening"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({StreamState.COMPLETED, StreamState.ABORTED, StreamState.FAILED})

# Allowed non-terminal -> next edges.
TRANSITIONS = {
    StreamState.OPENING: frozenset({StreamState.STREAMING, StreamState.ABORTED, StreamState.FAILED}),
    StreamState.STREAMING: frozenset({StreamState.COMPLETED, StreamState.ABORTED, StreamState.FAILED}),
}


__all__ = ["StreamState", "TRANSITIONS"]
