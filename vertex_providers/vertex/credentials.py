"""Vertex credential providers.

Purpose:
- Obtain a short-lived OAuth bearer token for exactly one adapter call and
  turn it into request headers.

Behavior:
- ``GcloudCredentialProvider`` spawns one external process per call (by
  default ``gcloud auth print-access-token``) and awaits it without blocking
  the event loop. Any output on stderr, a non-zero exit status, a spawn
  failure or an empty token raises ``CredentialError``.
- Tokens are never cached or persisted; a new one is fetched per call and
  dropped once the headers are built.
- No retries. A failed fetch aborts the call.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import Dict, Optional, Sequence, Union

from ..base.errors import CredentialError
from ..base.interfaces import CredentialProvider
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config.defaults import GCLOUD_TOKEN_COMMAND

PROVIDER_NAME = "vertex-anthropic"
CONTENT_TYPE = "application/json; charset=utf-8"


class GcloudCredentialProvider:
    """Fetch a bearer token by running the gcloud CLI (or a compatible command).

    Parameters:
        command: argv of the token command, or one string split with
            ``shlex``. Executed directly, without a shell.
        logger: Optional logger; defaults to ``vertex_providers.credentials``.
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]] = GCLOUD_TOKEN_COMMAND,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if isinstance(command, str):
            command = shlex.split(command)
        elif not isinstance(command, (list, tuple)) or not all(isinstance(part, str) for part in command):
            raise ValueError(f"token command must be a string or a list of strings, got {command!r}")
        if not command:
            raise ValueError("token command must not be empty")
        self._command = tuple(command)
        self._logger = logger or get_logger("vertex_providers.credentials")

    @property
    def command(self) -> tuple:
        return self._command

    def _fail(self, message: str, raw: Optional[Exception] = None) -> CredentialError:
        err = CredentialError.build(message, provider=PROVIDER_NAME, raw=raw)
        normalized_log_event(
            self._logger,
            "credentials.error",
            LogContext(provider=PROVIDER_NAME),
            phase="credentials",
            level=logging.ERROR,
            error_code=err.code.value,
            error=message[:260],
        )
        return err

    async def get_token(self) -> str:
        """Run the token command once and return its trimmed stdout."""
        normalized_log_event(
            self._logger,
            "credentials.fetch",
            LogContext(provider=PROVIDER_NAME),
            phase="credentials",
            level=logging.DEBUG,
            command=self._command[0],
        )
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise self._fail(f"Failed to get access token: {exc}", raw=exc) from exc
        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise
        err_text = stderr.decode("utf-8", errors="replace").strip()
        if err_text:
            raise self._fail(f"Failed to get access token: {err_text}")
        if proc.returncode != 0:
            raise self._fail(f"Failed to get access token: command exited with status {proc.returncode}")
        token = stdout.decode("utf-8", errors="replace").strip()
        if not token:
            raise self._fail("Access token is empty")
        return token


class StaticCredentialProvider:
    """Return a token the caller already holds.

    Useful in tests and for callers that obtain tokens through another
    channel (metadata server, workload identity).
    """

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(self) -> str:
        token = (self._token or "").strip()
        if not token:
            raise CredentialError.build("Access token is empty", provider=PROVIDER_NAME)
        return token


async def get_auth_headers(credentials: CredentialProvider) -> Dict[str, str]:
    """Fetch a fresh token from ``credentials`` and build the request headers."""
    token = await credentials.get_token()
    if not token or not token.strip():
        raise CredentialError.build("Access token is empty", provider=PROVIDER_NAME)
    return {
        "Authorization": f"Bearer {token.strip()}",
        "Content-Type": CONTENT_TYPE,
    }


__all__ = [
    "PROVIDER_NAME",
    "CONTENT_TYPE",
    "GcloudCredentialProvider",
    "StaticCredentialProvider",
    "get_auth_headers",
]
