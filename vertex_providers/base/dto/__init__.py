"""Pydantic DTOs for inbound call options."""

from .generation import GenerationOptionsDTO, TurnDTO

__all__ = ["GenerationOptionsDTO", "TurnDTO"]
