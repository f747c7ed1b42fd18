"""Anthropic Claude on Google Cloud Vertex AI."""

from .client import VertexClaudeProvider, build_endpoint_url
from .credentials import GcloudCredentialProvider, StaticCredentialProvider, get_auth_headers
from .chat_helpers import call_once, extract_replies
from .request_builder import build_request_body
from .stream_helpers import stream_chat

__all__ = [
    "VertexClaudeProvider",
    "build_endpoint_url",
    "GcloudCredentialProvider",
    "StaticCredentialProvider",
    "get_auth_headers",
    "call_once",
    "extract_replies",
    "build_request_body",
    "stream_chat",
]
