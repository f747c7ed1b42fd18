"""
Mid-stream transport failure.

Raised when the event source fails after a successful open. The original
exception is kept untouched on ``raw`` and chained as ``__cause__``.
"""
from __future__ import annotations

from typing import Optional

from .classification import classify_exception
from .error_code import RETRYABLE_CODES
from .provider_error import ProviderError


class MidStreamTransportError(ProviderError):
    """The event source broke after the stream was opened."""

    @classmethod
    def wrap(cls, exc: Exception, *, provider: str, model: Optional[str] = None) -> "MidStreamTransportError":
        code = classify_exception(exc)
        return cls(
            code=code,
            message=str(exc) or exc.__class__.__name__,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )


__all__ = ["MidStreamTransportError"]
