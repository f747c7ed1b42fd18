"""Static Claude model metadata consumed by the chat framework.

The framework uses ``context_length`` and ``max_response_tokens`` for its
token budgeting and ``vision`` to decide whether image blocks may be sent.
Unknown model names fall back to the ``default`` entry.
"""

from __future__ import annotations

from typing import Any, Dict

from ..config.defaults import VERTEX_DEFAULT_MODEL

_CLAUDE_3_LIMITS: Dict[str, Any] = {
    "context_length": 100000,
    "vision": True,
    "max_response_tokens": 10000,
}

CLAUDE_MODEL_INFO: Dict[str, Dict[str, Any]] = {
    "default": dict(_CLAUDE_3_LIMITS),
    "claude-3-opus-20240229": dict(_CLAUDE_3_LIMITS),
    "claude-3-sonnet-20240229": dict(_CLAUDE_3_LIMITS),
    "claude-3-haiku-20240307": dict(_CLAUDE_3_LIMITS),
    "claude-3-sonnet-20240229-steering-preview": dict(_CLAUDE_3_LIMITS),
    "claude-3-5-sonnet-20240620": dict(_CLAUDE_3_LIMITS),
}

CLAUDE_PARTICIPANTS: Dict[str, Dict[str, str]] = {
    "bot": {
        "display": "Claude",
        "author": "assistant",
        "default_message_type": "message",
    },
}

CLAUDE_DEFAULT_MODEL_OPTIONS: Dict[str, Any] = {
    "model": VERTEX_DEFAULT_MODEL,
    **_CLAUDE_3_LIMITS,
}


def get_model_info(model: str) -> Dict[str, Any]:
    """Return metadata for ``model``.

    Vertex names (``claude-3-opus@20240229``) and Anthropic names
    (``claude-3-opus-20240229``) resolve to the same entry.
    """
    key = (model or "").replace("@", "-")
    return dict(CLAUDE_MODEL_INFO.get(key, CLAUDE_MODEL_INFO["default"]))


__all__ = [
    "CLAUDE_MODEL_INFO",
    "CLAUDE_PARTICIPANTS",
    "CLAUDE_DEFAULT_MODEL_OPTIONS",
    "get_model_info",
]
