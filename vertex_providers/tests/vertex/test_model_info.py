from __future__ import annotations

from vertex_providers.vertex.model_info import (
    CLAUDE_DEFAULT_MODEL_OPTIONS,
    CLAUDE_MODEL_INFO,
    get_model_info,
)


def test_vertex_and_anthropic_names_resolve_to_same_entry():
    assert get_model_info("claude-3-5-sonnet@20240620") == CLAUDE_MODEL_INFO["claude-3-5-sonnet-20240620"]
    assert get_model_info("claude-3-haiku-20240307")["vision"] is True


def test_unknown_model_falls_back_to_default():
    assert get_model_info("claude-9") == CLAUDE_MODEL_INFO["default"]
    assert get_model_info("") == CLAUDE_MODEL_INFO["default"]


def test_returned_info_is_a_copy():
    info = get_model_info("claude-3-opus@20240229")
    info["context_length"] = 1
    assert CLAUDE_MODEL_INFO["claude-3-opus-20240229"]["context_length"] == 100000


def test_default_model_options():
    assert CLAUDE_DEFAULT_MODEL_OPTIONS["model"] == "claude-3-opus@20240229"
    assert CLAUDE_DEFAULT_MODEL_OPTIONS["max_response_tokens"] == 10000
