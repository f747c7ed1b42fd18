"""
Provider interfaces (Protocols) public surface.

Re-exports the single-class modules under
``vertex_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import CredentialProvider, HasDefaultModel, LLMProvider

__all__ = ["CredentialProvider", "HasDefaultModel", "LLMProvider"]
