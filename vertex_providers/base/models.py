"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``vertex_providers.base.models_parts``.
"""

from .models_parts.message import Message, Role
from .models_parts.generation_request import GenerationRequest

__all__ = [
    "Message",
    "Role",
    "GenerationRequest",
]
