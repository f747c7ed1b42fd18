"""
Stream open failure.

Raised when the streaming connection answers with a non-200 status, or when the
connection cannot be established at all. ``http_status`` is ``None`` in the
latter case.
"""
from __future__ import annotations

from .provider_error import ProviderError


class ConnectionOpenError(ProviderError):
    """Non-200 status (or transport failure) while opening the event stream."""


__all__ = ["ConnectionOpenError"]
