"""Streaming package for the adapter.

Exposes event framing, payload classification, lifecycle states, metrics and
the stream interpreter under a single namespace.
"""

from .event_stream import DONE_SENTINEL, HEARTBEAT_EVENT_NAMES, StreamEvent, aiter_events
from .payloads import LIFECYCLE_EVENT_TYPES, ParsedPayload, PayloadKind, classify_payload
from .stream_state import StreamState
from .streaming_metrics import StreamMetrics
from .interpreter import ProgressCallback, StreamInterpreter, StreamOpener, run_stream

__all__ = [
    "DONE_SENTINEL",
    "HEARTBEAT_EVENT_NAMES",
    "StreamEvent",
    "aiter_events",
    "LIFECYCLE_EVENT_TYPES",
    "ParsedPayload",
    "PayloadKind",
    "classify_payload",
    "StreamState",
    "StreamMetrics",
    "ProgressCallback",
    "StreamInterpreter",
    "StreamOpener",
    "run_stream",
]
