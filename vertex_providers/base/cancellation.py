"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``vertex_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts`` for organization.

Notes
-----
- ``CancellationToken`` is the caller's cancellation handle for one or more
  adapter calls; it can interrupt a bound asyncio task mid-await.
- ``CancelledError`` is raised by calls that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
