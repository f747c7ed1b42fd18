"""Streaming metrics data structures.

Collected per call by the stream interpreter and reported on the terminal log
event; never shared between calls.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters for a single streamed invocation.

    Attributes:
        emitted: Fragments forwarded to the progress callback (``"[DONE]"``
            excluded).
        heartbeats: Keep-alive events skipped.
        parse_errors: Payloads that failed to decode.
        unrecognized: Decoded payloads matching no known shape.
        time_to_first_token_ms: Delay from stream start to the first fragment.
        total_duration_ms: Delay from stream start to the terminal state.
    """

    emitted: int = 0
    heartbeats: int = 0
    parse_errors: int = 0
    unrecognized: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]
