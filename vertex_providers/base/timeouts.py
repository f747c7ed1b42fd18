"""Timeout configuration for the adapter's HTTP client.

The adapter applies no call-level deadline of its own; callers layer one on
through the cancellation token. What remains are the transport timeouts
handed to ``httpx``, centralized here so no other module carries numeric
timeout literals.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use only. Supported environment variables (all optional, seconds,
    must be positive):
        VERTEX_TIMEOUT_CONNECT_SECONDS
        VERTEX_TIMEOUT_STREAM_SECONDS
        VERTEX_TIMEOUT_HTTP_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Timeout for establishing the TCP/TLS
            connection to the Vertex endpoint.
        stream_timeout_seconds: Idle timeout while waiting for the next
            event on an open stream.
        http_timeout_seconds: Read timeout for a non-streaming call, which
            returns only once the whole completion is generated.
    """

    connect_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 300.0

    def to_httpx(self) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` for a client serving both call paths.

        The read timeout is the larger of the stream idle and whole-response
        timeouts, since one client carries both kinds of calls.
        """
        return httpx.Timeout(
            max(self.stream_timeout_seconds, self.http_timeout_seconds),
            connect=self.connect_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED  # noqa: PLW0603 - intentional, documented module cache
    if _CACHED is None:
        defaults = TimeoutConfig()
        _CACHED = TimeoutConfig(
            connect_timeout_seconds=_parse_env_float(
                "VERTEX_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds
            ),
            stream_timeout_seconds=_parse_env_float(
                "VERTEX_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds
            ),
            http_timeout_seconds=_parse_env_float(
                "VERTEX_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds
            ),
        )
    return _CACHED


def reset_timeout_config() -> None:
    """Drop the cached configuration so the next read re-parses the environment."""
    global _CACHED  # noqa: PLW0603
    _CACHED = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]
