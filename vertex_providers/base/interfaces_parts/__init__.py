"""Interfaces (Protocols) split into single-class modules."""

from .credential_provider import CredentialProvider
from .llm_provider import LLMProvider
from .has_default_model import HasDefaultModel

__all__ = ["CredentialProvider", "LLMProvider", "HasDefaultModel"]
