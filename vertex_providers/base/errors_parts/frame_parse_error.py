"""
Malformed stream frame.

Built by the stream interpreter when one event payload is not valid JSON. It is
logged and the stream continues; it never escapes the interpreter.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class FrameParseError(ProviderError):
    """A single event payload failed to decode."""

    @classmethod
    def build(
        cls,
        payload: str,
        exc: Exception,
        *,
        provider: str,
        model: Optional[str] = None,
    ) -> "FrameParseError":
        return cls(
            code=ErrorCode.VALIDATION,
            message=f"Error parsing message data: {exc}",
            provider=provider,
            model=model,
            raw=exc,
            error_body=payload,
        )


__all__ = ["FrameParseError"]
