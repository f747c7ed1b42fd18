"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``vertex_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status
from .errors_parts.credential_error import CredentialError
from .errors_parts.connection_open_error import ConnectionOpenError
from .errors_parts.midstream_transport_error import MidStreamTransportError
from .errors_parts.frame_parse_error import FrameParseError
from .errors_parts.contract_violation import ProviderContractViolation

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
