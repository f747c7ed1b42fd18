"""
Provider contract violation.

Raised when a completed response does not have the documented candidate shape
(``content[0].text`` per candidate). Not recovered.
"""
from __future__ import annotations

from .provider_error import ProviderError


class ProviderContractViolation(ProviderError):
    """Response shape does not match the provider's documented structure."""


__all__ = ["ProviderContractViolation"]
