"""
Credential acquisition error.

Raised when the bearer token source fails or returns an empty token. The call
that requested the credential is aborted; nothing retries internally.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class CredentialError(ProviderError):
    """Token issuance failed (process error, stderr output, or empty token)."""

    @classmethod
    def build(cls, message: str, *, provider: str, raw: Optional[Exception] = None) -> "CredentialError":
        return cls(code=ErrorCode.AUTH, message=message, provider=provider, raw=raw)


__all__ = ["CredentialError"]
