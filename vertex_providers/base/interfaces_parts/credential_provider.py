"""CredentialProvider Protocol (single-class module).

Source of short-lived bearer tokens. Implementations are awaited once per
adapter call and must not cache tokens across calls.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialProvider(Protocol):
    """Produces a fresh bearer token, or raises ``CredentialError``."""

    async def get_token(self) -> str:  # pragma: no cover - interface
        """Return a non-empty access token for exactly one call."""
        ...
