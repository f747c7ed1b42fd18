"""Configuration layer for the Vertex adapter.

Merge order (later wins)
------------------------
1. Built-in defaults (:mod:`vertex_providers.config.defaults`)
2. Optional external config file (JSON or YAML) pointed to by
   ``VERTEX_PROVIDERS_CONFIG_FILE``
3. Environment variables (see :mod:`vertex_providers.config.env`)
4. Explicit overrides passed to :func:`get_provider_config` (``None`` values
   are ignored)

External Config File
--------------------
JSON is tried first, then YAML. Settings may sit at the top level or under a
``vertex`` section::

    vertex:
      project_id: my-project
      location: europe-west1
      model: claude-3-5-sonnet@20240620

Public API
----------
* get_provider_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .defaults import (
    GCLOUD_TOKEN_COMMAND,
    VERTEX_ANTHROPIC_VERSION,
    VERTEX_DEFAULT_CACHE_NAMESPACE,
    VERTEX_DEFAULT_LOCATION,
    VERTEX_DEFAULT_MODEL,
    VERTEX_DEFAULT_PROJECT_ID,
)
from .env import CONFIG_FILE_ENV, env_overrides

DEFAULTS: Dict[str, Any] = {
    "project_id": VERTEX_DEFAULT_PROJECT_ID,
    "location": VERTEX_DEFAULT_LOCATION,
    "model": VERTEX_DEFAULT_MODEL,
    "anthropic_version": VERTEX_ANTHROPIC_VERSION,
    "cache_namespace": VERTEX_DEFAULT_CACHE_NAMESPACE,
    "token_command": list(GCLOUD_TOKEN_COMMAND),
}

_FILE_SECTION = "vertex"
_FILE_CACHE: Optional[Dict[str, Any]] = None


def _parse_config_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the config file named by ``VERTEX_PROVIDERS_CONFIG_FILE``.

    A missing variable or file yields ``{}``. A file that is neither JSON
    nor YAML raises ``yaml.YAMLError``; a broken config file is not silently
    ignored.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        data = {}
    section = data.get(_FILE_SECTION)
    _FILE_CACHE = dict(section) if isinstance(section, dict) else data
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file so the next read reloads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


def get_provider_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged adapter configuration.

    Keys: ``project_id``, ``location``, ``model``, ``anthropic_version``,
    ``cache_namespace``, ``token_command``.
    """
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "reset_config_cache",
]
