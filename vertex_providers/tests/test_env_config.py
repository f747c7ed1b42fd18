from __future__ import annotations

import json

import pytest

from vertex_providers.config import DEFAULTS, get_provider_config, reset_config_cache
from vertex_providers.config.env import env_overrides, get_env_value, is_placeholder
from vertex_providers.vertex import VertexClaudeProvider


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("example-project")
    assert is_placeholder("test_project")
    assert not is_placeholder("real-value")
    assert not is_placeholder(None)


def test_defaults_when_nothing_is_set():
    cfg = get_provider_config()
    assert cfg == DEFAULTS
    assert cfg["token_command"] == ["gcloud", "auth", "print-access-token"]


def test_location_alias_and_placeholder_skip(monkeypatch):
    monkeypatch.setenv("VERTEX_LOCATION", "your-region-placeholder")
    monkeypatch.setenv("GOOGLE_CLOUD_REGION", "europe-west4")
    assert get_env_value("location") == "europe-west4"
    assert env_overrides() == {"location": "europe-west4"}


def test_merge_order_file_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "vertex.json"
    path.write_text(json.dumps({"vertex": {"project_id": "file-project", "location": "file-loc", "model": "file-model"}}))
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("VERTEX_MODEL", "env-model")
    reset_config_cache()

    cfg = get_provider_config({"location": "override-loc", "project_id": None})
    assert cfg["project_id"] == "file-project"
    assert cfg["model"] == "env-model"
    assert cfg["location"] == "override-loc"


def test_yaml_config_file_without_section(monkeypatch, tmp_path):
    path = tmp_path / "vertex.yaml"
    path.write_text("project_id: yaml-project\ncache_namespace: claude-yaml\n")
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()

    cfg = get_provider_config()
    assert cfg["project_id"] == "yaml-project"
    assert cfg["cache_namespace"] == "claude-yaml"


def test_missing_config_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    reset_config_cache()
    assert get_provider_config() == DEFAULTS


def test_config_file_is_cached(monkeypatch, tmp_path):
    path = tmp_path / "vertex.yaml"
    path.write_text("location: first\n")
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config()["location"] == "first"
    path.write_text("location: second\n")
    assert get_provider_config()["location"] == "first"
    reset_config_cache()
    assert get_provider_config()["location"] == "second"


@pytest.mark.parametrize("text", ["[1, 2]", "just a string"])
def test_non_mapping_config_file_yields_defaults(monkeypatch, tmp_path, text):
    path = tmp_path / "vertex.yaml"
    path.write_text(text)
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config() == DEFAULTS


def test_token_command_string_from_file_is_split(monkeypatch, tmp_path):
    path = tmp_path / "vertex.yaml"
    path.write_text('vertex:\n  token_command: "gcloud auth print-access-token --account ops@example.org"\n')
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()

    provider = VertexClaudeProvider()
    assert provider._credentials.command == (
        "gcloud",
        "auth",
        "print-access-token",
        "--account",
        "ops@example.org",
    )


def test_token_command_of_wrong_type_is_rejected(monkeypatch, tmp_path):
    path = tmp_path / "vertex.json"
    path.write_text(json.dumps({"token_command": {"bin": "gcloud"}}))
    monkeypatch.setenv("VERTEX_PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()

    with pytest.raises(ValueError, match="token command"):
        VertexClaudeProvider()
