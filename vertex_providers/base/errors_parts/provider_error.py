"""
Structured provider error exception type.

Wraps transport, HTTP and protocol failures with a normalized `ErrorCode` for
consistent handling and structured logging. HTTP failures additionally carry
the status code and the response body, parsed as JSON when possible and kept
as raw text otherwise, so callers can branch on ``http_status``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from .error_code import RETRYABLE_CODES, ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"vertex"``).
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
        http_status: HTTP status code when the failure came from a response.
        error_json: Response body decoded as JSON, when it decoded.
        error_body: Raw response text, kept only when JSON decoding failed.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None
    http_status: Optional[int] = None
    error_json: Optional[Any] = None
    error_body: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    @classmethod
    def from_http_response(
        cls,
        status: int,
        body: Optional[str],
        *,
        provider: str,
        model: Optional[str] = None,
    ):
        """Build an error from a non-200 response status and its body text.

        The body is attached as ``error_json`` when it parses as JSON, otherwise
        as ``error_body``. ``body=None`` means the body could not be read.
        """
        from .classification import code_for_status  # local import to avoid cycles

        code = code_for_status(status)
        if body is None:
            message = f"Failed to send message. HTTP {status}"
        else:
            message = f"Failed to send message. HTTP {status} - {body}"
        err = cls(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            http_status=status,
        )
        if body is not None:
            try:
                err.error_json = json.loads(body)
            except ValueError:
                err.error_body = body
        return err


__all__ = ["ProviderError"]
