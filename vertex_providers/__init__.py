"""vertex_providers package

Adapter that lets a generic chat framework call Anthropic Claude models
hosted on Google Cloud Vertex AI, either as a single request/response call or
as an incrementally streamed response.

Public API (re-exported):
    - Version: ``__version__``
    - Provider: :class:`VertexClaudeProvider`
    - Credentials: :class:`GcloudCredentialProvider`,
      :class:`StaticCredentialProvider`
    - Request types: :class:`GenerationRequest`, :class:`Message`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Errors: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    ConnectionOpenError,
    CredentialError,
    ErrorCode,
    FrameParseError,
    MidStreamTransportError,
    ProviderContractViolation,
    ProviderError,
)
from .base.models import GenerationRequest, Message
from .vertex import (
    GcloudCredentialProvider,
    StaticCredentialProvider,
    VertexClaudeProvider,
    extract_replies,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "VertexClaudeProvider",
    "GcloudCredentialProvider",
    "StaticCredentialProvider",
    "GenerationRequest",
    "Message",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "CredentialError",
    "ConnectionOpenError",
    "MidStreamTransportError",
    "FrameParseError",
    "ProviderContractViolation",
    "extract_replies",
]
