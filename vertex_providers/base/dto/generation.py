"""
Pydantic DTOs validating the chat framework's call-options object.

Purpose
-------
Reject malformed call options before any credential is fetched or any
connection is opened: ``messages`` must be a non-empty list of user/assistant
turns and ``max_tokens`` must be positive. Role alternation is not checked;
that belongs to the caller.

External dependencies: Pydantic only. Validation either succeeds or raises a
``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TurnDTO(BaseModel):
    """One ``{role, content}`` turn.

    ``content`` is either text or a list of provider content blocks, which are
    passed through without inspection.
    """

    role: Literal["user", "assistant"]
    content: Union[str, List[Dict[str, Any]]]


class GenerationOptionsDTO(BaseModel):
    """Recognized fields of the inbound call-options object.

    Unknown keys (model name, temperature and the like carried by the chat
    framework) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    messages: List[TurnDTO] = Field(..., min_length=1)
    system: Optional[str] = None
    max_tokens: int = Field(..., gt=0)
    stream: bool = False


__all__ = ["TurnDTO", "GenerationOptionsDTO"]
