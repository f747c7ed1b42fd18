"""
Message DTO used by the adapter.

Defines the `Message` dataclass and the `Role` literal for the two turn roles
the Vertex Anthropic endpoint accepts in ``messages``. System instructions
travel separately on the request, never as a message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Union


Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Attributes:
        role: ``"user"`` or ``"assistant"``.
        content: Plain text, or a list of provider content blocks
            (``{"type": "text", "text": ...}`` and similar) passed through
            verbatim.
    """

    role: Role
    content: Union[str, List[Dict[str, Any]]]

    def to_wire(self) -> Dict[str, Any]:
        """Return the ``{"role", "content"}`` mapping sent on the wire."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
]
