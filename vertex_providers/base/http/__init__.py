"""HTTP helpers for the adapter (client construction only)."""

from .client import create_async_client, call_client

__all__ = ["create_async_client", "call_client"]
