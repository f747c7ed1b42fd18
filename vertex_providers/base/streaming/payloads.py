"""Classification of decoded stream payloads.

Three payload shapes are observed on Vertex-hosted Claude streams:

- ``BATCH_OUTPUTS``: ``{"outputs": [{"content": "..."}, ...]}``, forwarded as
  the first candidate's text;
- ``DELTA``: Anthropic message events carrying ``delta``
  (``content_block_delta``, ``message_delta``);
- ``CONTENT_BLOCK``: ``content_block_start`` events carrying ``content_block``.

Everything else (``message_start``, ``message_stop``, non-object JSON) is
``UNRECOGNIZED``. The precedence matches the provider's documented order: a
non-empty ``outputs`` list wins over ``delta`` / ``content_block``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


# Anthropic lifecycle events that carry neither text nor a delta. They stay
# unrecognized and are only reported at debug level.
LIFECYCLE_EVENT_TYPES = frozenset(
    {"message_start", "content_block_stop", "message_stop", "ping"}
)


class PayloadKind(str, Enum):
    """Closed set of recognized payload shapes plus the default arm."""

    BATCH_OUTPUTS = "batch_outputs"
    DELTA = "delta"
    CONTENT_BLOCK = "content_block"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ParsedPayload:
    """A decoded payload tagged with its shape.

    Attributes:
        kind: Which shape matched.
        data: The decoded JSON value, unchanged.
    """

    kind: PayloadKind
    data: Any

    def batch_text(self) -> Optional[str]:
        """Return the first candidate's ``content`` for batch payloads, else ``None``.

        A first candidate without content (or with a non-string one) yields
        ``None``; the caller drops such frames.
        """
        if self.kind is not PayloadKind.BATCH_OUTPUTS:
            return None
        first = self.data["outputs"][0]
        if not isinstance(first, Mapping):
            return None
        content = first.get("content")
        return content if isinstance(content, str) and content else None

    def is_lifecycle(self) -> bool:
        """True for unrecognized payloads whose ``type`` is a known lifecycle event."""
        return (
            self.kind is PayloadKind.UNRECOGNIZED
            and isinstance(self.data, Mapping)
            and self.data.get("type") in LIFECYCLE_EVENT_TYPES
        )


def _present(value: Any) -> bool:
    """Objects and arrays count as present even when empty; scalars need a truthy value."""
    if isinstance(value, (Mapping, list)):
        return True
    return bool(value)


def classify_payload(data: Any) -> ParsedPayload:
    """Tag a decoded JSON payload with its :class:`PayloadKind`."""
    if not isinstance(data, Mapping):
        return ParsedPayload(PayloadKind.UNRECOGNIZED, data)
    outputs = data.get("outputs")
    if isinstance(outputs, list) and outputs:
        return ParsedPayload(PayloadKind.BATCH_OUTPUTS, data)
    if _present(data.get("delta")):
        return ParsedPayload(PayloadKind.DELTA, data)
    if _present(data.get("content_block")):
        return ParsedPayload(PayloadKind.CONTENT_BLOCK, data)
    return ParsedPayload(PayloadKind.UNRECOGNIZED, data)


__all__ = ["LIFECYCLE_EVENT_TYPES", "PayloadKind", "ParsedPayload", "classify_payload"]
