"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `vertex_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .classification import classify_exception, code_for_status
from .credential_error import CredentialError
from .connection_open_error import ConnectionOpenError
from .midstream_transport_error import MidStreamTransportError
from .frame_parse_error import FrameParseError
from .contract_violation import ProviderContractViolation

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "CredentialError",
    "ConnectionOpenError",
    "MidStreamTransportError",
    "FrameParseError",
    "ProviderContractViolation",
]
