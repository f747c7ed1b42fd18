"""VertexClaudeProvider adapter.

Serves Anthropic Claude models hosted on Google Cloud Vertex AI to a generic
chat framework, through either a single request/response call or an
incrementally streamed response.

Key behaviors / architecture notes:
* One call = one fresh credential, one connection, one interpreter. Instances
  hold configuration only, so concurrent calls are independent.
* Both call paths POST to the model's ``streamRawPredict`` endpoint; the
  ``stream`` flag in the body selects the response format.
* No internal retries or deadlines. Callers layer them on through
  ``ProviderError.retryable`` and the cancellation token.
* Settings resolve through :func:`vertex_providers.config.get_provider_config`
  (defaults, config file, environment, then constructor arguments).
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.interfaces import CredentialProvider, HasDefaultModel, LLMProvider
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import GenerationRequest
from ..base.streaming import ProgressCallback, StreamInterpreter
from ..config import get_provider_config
from ..config.defaults import VERTEX_ENDPOINT_TEMPLATE
from .chat_helpers import call_once, extract_replies
from .credentials import PROVIDER_NAME, GcloudCredentialProvider, get_auth_headers
from .model_info import (
    CLAUDE_DEFAULT_MODEL_OPTIONS,
    CLAUDE_MODEL_INFO,
    CLAUDE_PARTICIPANTS,
    get_model_info,
)
from .request_builder import body_from_request
from .stream_helpers import stream_chat


def build_endpoint_url(project_id: str, location: str, model: str) -> str:
    """Return the ``streamRawPredict`` URL for ``model`` in ``project_id``/``location``."""
    return VERTEX_ENDPOINT_TEMPLATE.format(project_id=project_id, location=location, model=model)


class VertexClaudeProvider(LLMProvider, HasDefaultModel):
    """Adapter for Claude on Vertex AI supporting one-shot and streamed calls.

    Parameters:
        project_id: Google Cloud project; defaults to ``GOOGLE_CLOUD_PROJECT``
            or the built-in default.
        location: Vertex region, e.g. ``us-east5``.
        model: Vertex model id, e.g. ``claude-3-opus@20240229``.
        cache_namespace: Namespace the chat framework uses for its response
            cache.
        anthropic_version: Value sent as ``anthropic_version``.
        credentials: Token source; defaults to the gcloud CLI.
        http_client: Shared ``httpx.AsyncClient`` owned by the caller. When
            omitted a client is opened and closed per call.
        model_options: Overrides merged over the default model options.
    """

    def __init__(
        self,
        *,
        project_id: Optional[str] = None,
        location: Optional[str] = None,
        model: Optional[str] = None,
        cache_namespace: Optional[str] = None,
        anthropic_version: Optional[str] = None,
        credentials: Optional[CredentialProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        model_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        cfg = get_provider_config(
            {
                "project_id": project_id,
                "location": location,
                "model": model,
                "cache_namespace": cache_namespace,
                "anthropic_version": anthropic_version,
            }
        )
        self._project_id: str = cfg["project_id"]
        self._location: str = cfg["location"]
        self._model: str = cfg["model"]
        self._anthropic_version: str = cfg["anthropic_version"]
        self.cache_namespace: str = cfg["cache_namespace"]
        self._credentials: CredentialProvider = credentials or GcloudCredentialProvider(cfg["token_command"])
        self._http_client = http_client
        self._endpoint_url = build_endpoint_url(self._project_id, self._location, self._model)
        self._logger = get_logger("vertex_providers.vertex")

        self.model_options: Dict[str, Any] = {
            **CLAUDE_DEFAULT_MODEL_OPTIONS,
            **get_model_info(self._model),
            "model": self._model,
            **dict(model_options or {}),
        }
        self.participants = CLAUDE_PARTICIPANTS
        self.model_info = CLAUDE_MODEL_INFO
        self.n = 1

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    def default_model(self) -> Optional[str]:
        return self._model

    @property
    def model(self) -> str:
        return self._model

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def location(self) -> str:
        return self._location

    @property
    def anthropic_version(self) -> str:
        return self._anthropic_version

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    @property
    def http_client(self) -> Optional[httpx.AsyncClient]:
        return self._http_client

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log_context(self) -> LogContext:
        """Fresh logging context for one call."""
        return LogContext(provider=self.provider_name, model=self._model, location=self._location)

    def build_request(self, model_options: Mapping[str, Any]) -> GenerationRequest:
        """Validate call options into a ``GenerationRequest``.

        ``max_tokens`` falls back to the model's ``max_response_tokens`` when
        the options do not carry one.

        Raises:
            pydantic.ValidationError: malformed options.
        """
        options = dict(model_options)
        if options.get("max_tokens") is None:
            options["max_tokens"] = self.model_options["max_response_tokens"]
        return GenerationRequest.from_options(options)

    def build_body(self, request: GenerationRequest) -> Dict[str, Any]:
        return body_from_request(request, anthropic_version=self._anthropic_version)

    async def _dispatch(
        self,
        request: GenerationRequest,
        on_progress: Optional[ProgressCallback],
        cancellation_token: Optional[CancellationToken],
        debug: bool,
    ) -> Any:
        if request.stream and on_progress is None:
            raise ValueError("streaming calls require an on_progress callback")
        # The credential fetch itself is not interruptible.
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        headers = await get_auth_headers(self._credentials)
        body = self.build_body(request)
        if debug:
            log_event(self._logger, "chat.request", self.log_context(), level=logging.DEBUG, url=self._endpoint_url, body=body)
        if request.stream:
            return await stream_chat(self, body, headers, on_progress, cancellation_token)
        return await call_once(self, body, headers, cancellation_token)

    async def get_completion(
        self,
        model_options: Mapping[str, Any],
        on_progress: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
        debug: bool = False,
    ) -> Any:
        """Chat framework entry point.

        Returns the provider's JSON document for non-streaming options and
        ``None`` for streaming ones, whose output arrives through
        ``on_progress`` and ends with exactly one ``"[DONE]"``.

        Raises:
            CredentialError: the token could not be obtained.
            ConnectionOpenError: the stream could not be opened.
            MidStreamTransportError: the stream broke after opening.
            ProviderError: the non-streaming call failed.
            CancelledError: ``cancellation_token`` was cancelled.
        """
        request = self.build_request(model_options)
        result = await self._dispatch(request, on_progress, cancellation_token, debug)
        return None if request.stream else result

    async def complete(
        self,
        request: GenerationRequest,
        cancellation_token: Optional[CancellationToken] = None,
        debug: bool = False,
    ) -> List[str]:
        """Run ``request`` without streaming and return the reply strings."""
        if request.stream:
            request = dataclasses.replace(request, stream=False)
        result = await self._dispatch(request, None, cancellation_token, debug)
        return extract_replies(result)

    async def stream(
        self,
        request: GenerationRequest,
        on_progress: ProgressCallback,
        cancellation_token: Optional[CancellationToken] = None,
        debug: bool = False,
    ) -> StreamInterpreter:
        """Run ``request`` as a stream; returns the finished interpreter (metrics, trigger)."""
        if not request.stream:
            request = dataclasses.replace(request, stream=True)
        return await self._dispatch(request, on_progress, cancellation_token, debug)

    def parse_replies(self, result: Any) -> List[str]:
        return extract_replies(result)


__all__ = ["VertexClaudeProvider", "build_endpoint_url"]
