"""vertex_providers.config.defaults
================================

Central place for the small, stable default values used by the Vertex
adapter. Every value can be overridden through the config file, environment
variables or explicit overrides (see :mod:`vertex_providers.config`).

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# ---- Vertex AI endpoint ----
# Google Cloud project used when GOOGLE_CLOUD_PROJECT is unset.
VERTEX_DEFAULT_PROJECT_ID = "argos-434718"
# Region hosting the Anthropic publisher models.
VERTEX_DEFAULT_LOCATION = "us-east5"
# Vertex model identifiers use "@" before the version date.
VERTEX_DEFAULT_MODEL = "claude-3-opus@20240229"
# Wire protocol version required by Anthropic models on Vertex.
VERTEX_ANTHROPIC_VERSION = "vertex-2023-10-16"

VERTEX_ENDPOINT_TEMPLATE = (
    "https://{location}-aiplatform.googleapis.com/v1/projects/{project_id}"
    "/locations/{location}/publishers/anthropic/models/{model}:streamRawPredict"
)

# ---- Chat framework integration ----
VERTEX_DEFAULT_CACHE_NAMESPACE = "claude"

# ---- Credentials ----
# Command printing a short-lived OAuth access token on stdout.
GCLOUD_TOKEN_COMMAND = ("gcloud", "auth", "print-access-token")

# ---- CLI defaults ----
VERTEX_CLI_DEFAULT_MAX_TOKENS = 1024


__all__ = [
    "VERTEX_DEFAULT_PROJECT_ID",
    "VERTEX_DEFAULT_LOCATION",
    "VERTEX_DEFAULT_MODEL",
    "VERTEX_ANTHROPIC_VERSION",
    "VERTEX_ENDPOINT_TEMPLATE",
    "VERTEX_DEFAULT_CACHE_NAMESPACE",
    "GCLOUD_TOKEN_COMMAND",
    "VERTEX_CLI_DEFAULT_MAX_TOKENS",
]
