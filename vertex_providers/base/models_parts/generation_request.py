"""
GenerationRequest DTO: everything needed to build one provider call.

Built once per call from the chat framework's call-options object and
immutable afterwards. Validation of the inbound mapping is delegated to the
pydantic DTO in :mod:`vertex_providers.base.dto.generation`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .message import Message


@dataclass(frozen=True)
class GenerationRequest:
    """Normalized, immutable request for a single adapter call.

    Attributes:
        messages: Ordered conversation turns, already in the provider's
            expected role alternation.
        system: Optional system instruction; omitted from the wire body when
            falsy.
        max_tokens: Upper bound on generated tokens (> 0).
        stream: Whether the reply is streamed through the progress callback.
    """

    messages: Tuple[Message, ...]
    max_tokens: int
    stream: bool = False
    system: Optional[str] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GenerationRequest":
        """Validate a call-options mapping and convert it to a request.

        Recognized keys: ``messages``, ``system``, ``max_tokens``, ``stream``.

        Raises:
            pydantic.ValidationError: on empty ``messages``, unknown roles,
                or a non-positive ``max_tokens``.
        """
        from ..dto.generation import GenerationOptionsDTO  # local import to avoid cycles

        dto = GenerationOptionsDTO.model_validate(dict(options))
        return cls(
            messages=tuple(Message(role=m.role, content=m.content) for m in dto.messages),
            max_tokens=dto.max_tokens,
            stream=dto.stream,
            system=dto.system,
        )


__all__ = ["GenerationRequest"]
