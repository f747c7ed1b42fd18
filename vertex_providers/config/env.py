"""vertex_providers.config.env
===========================

Environment variable mapping for the Vertex adapter settings.

Purpose
-------
- Single source of truth for which environment variables feed which config
  field, with aliases listed after the canonical name.
- Placeholder detection so template values copied from a sample ``.env`` do
  not override real defaults.

Helpers never raise on unset variables; they return ``None`` and let the
config layer fall back.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Config field -> ordered env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "project_id": ("GOOGLE_CLOUD_PROJECT",),
    "location": ("VERTEX_LOCATION", "GOOGLE_CLOUD_REGION"),
    "model": ("VERTEX_MODEL",),
    "cache_namespace": ("VERTEX_CACHE_NAMESPACE",),
    "anthropic_version": ("VERTEX_ANTHROPIC_VERSION",),
}

CONFIG_FILE_ENV = "VERTEX_PROVIDERS_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_value(field: str) -> Optional[str]:
    """Return the first usable env value for ``field``.

    Empty and placeholder values are skipped so an alias can still apply.
    """
    for name in ENV_ALIASES.get(field, ()):
        val = os.getenv(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip()
    return None


def env_overrides() -> Dict[str, str]:
    """Return every config field currently set through the environment."""
    out: Dict[str, str] = {}
    for field in ENV_ALIASES:
        val = get_env_value(field)
        if val is not None:
            out[field] = val
    return out


__all__ = [
    "ENV_ALIASES",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "get_env_value",
    "env_overrides",
]
