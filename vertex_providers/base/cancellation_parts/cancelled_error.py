"""Cancellation error type.

Defines the public ``CancelledError`` used to signal caller-initiated
cancellation of an adapter call. Kept isolated to satisfy one-class-per-file
policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes cancellation from provider failures
    (it is deliberately not a ``ProviderError``), so callers can treat it as
    "no answer" rather than "broken answer".
    """


__all__ = ["CancelledError"]
