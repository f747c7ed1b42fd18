"""Request body construction for Anthropic models on Vertex AI.

``build_request_body`` is a pure function: it performs no I/O and does not
validate or merge role alternation; the chat framework owns the history.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..base.models import GenerationRequest, Message
from ..config.defaults import VERTEX_ANTHROPIC_VERSION

MessageLike = Union[Message, Mapping[str, Any]]


def _to_wire(message: MessageLike) -> Dict[str, Any]:
    if isinstance(message, Message):
        return message.to_wire()
    return {"role": message["role"], "content": message["content"]}


def build_request_body(
    messages: Iterable[MessageLike],
    system: Optional[str],
    max_tokens: int,
    stream: bool,
    *,
    anthropic_version: str = VERTEX_ANTHROPIC_VERSION,
) -> Dict[str, Any]:
    """Return the JSON body for one ``streamRawPredict`` call.

    ``messages`` keep their order and content. ``system`` is added only when
    it is a non-empty string; the key is never sent as ``null`` or ``""``.
    """
    body: Dict[str, Any] = {
        "anthropic_version": anthropic_version,
        "messages": [_to_wire(m) for m in messages],
        "max_tokens": max_tokens,
        "stream": bool(stream),
    }
    if system:
        body["system"] = system
    return body


def body_from_request(
    request: GenerationRequest,
    *,
    anthropic_version: str = VERTEX_ANTHROPIC_VERSION,
) -> Dict[str, Any]:
    """Shortcut for :func:`build_request_body` from a ``GenerationRequest``."""
    return build_request_body(
        request.messages,
        request.system,
        request.max_tokens,
        request.stream,
        anthropic_version=anthropic_version,
    )


__all__ = ["build_request_body", "body_from_request"]
