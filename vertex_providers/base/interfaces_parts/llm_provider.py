"""LLMProvider Protocol (single-class module).

Defines the per-call contract the chat framework relies on.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for an LLM completion adapter.

    ``get_completion`` returns the provider's JSON document for non-streaming
    options and ``None`` for streaming ones, whose output goes through
    ``on_progress`` and ends with exactly one ``"[DONE]"``.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"vertex-anthropic"``."""
        ...

    async def get_completion(
        self,
        model_options: Mapping[str, Any],
        on_progress: Any = None,
        cancellation_token: Optional[CancellationToken] = None,
        debug: bool = False,
    ) -> Any:  # pragma: no cover - interface
        ...
