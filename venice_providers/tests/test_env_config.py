"""Tests for the configuration merge and credential resolution."""
from __future__ import annotations

import json

from venice_providers.config import get_provider_config, reset_config_cache
from venice_providers.config.env import (
    get_env_var_candidates,
    is_placeholder,
    resolve_provider_key,
)


def test_defaults_without_any_source():
    cfg = get_provider_config("venice")
    assert cfg["model"] == "venice-uncensored"  # nosec B101
    assert cfg["base_url"] == "https://api.venice.ai/api/v1"  # nosec B101
    assert "api_key" not in cfg  # nosec B101


def test_env_then_overrides_win(monkeypatch):
    monkeypatch.setenv("VENICE_MODEL", "qwen3-4b")
    monkeypatch.setenv("VENICE_API_KEY", "sk-env-key-0001")
    cfg = get_provider_config("venice", {"model": "qwen3-235b", "api_key": None})
    assert cfg["model"] == "qwen3-235b"  # nosec B101
    assert cfg["api_key"] == "sk-env-key-0001"  # nosec B101
    assert get_provider_config("VENICE")["model"] == "qwen3-4b"  # nosec B101


def test_json_config_file(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"venice": {"model": "mistral-31-24b", "base_url": "https://proxy.local/v1"}}))
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = get_provider_config("venice")
    assert cfg["model"] == "mistral-31-24b"  # nosec B101
    assert cfg["base_url"] == "https://proxy.local/v1"  # nosec B101


def test_yaml_config_file_and_env_precedence(monkeypatch, tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text("venice:\n  model: qwen3-4b\n  api_key: sk-file-key-0002\n")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("VENICE_MODEL", "qwen3-235b")
    reset_config_cache()
    cfg = get_provider_config("venice")
    assert cfg["model"] == "qwen3-235b"  # nosec B101
    assert cfg["api_key"] == "sk-file-key-0002"  # nosec B101


def test_dotenv_file_is_loaded_once(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text('# comment\nVENICE_API_KEY="sk-dotenv-0003"\nMALFORMED\n')
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.delenv("VENICE_API_KEY", raising=False)
    reset_config_cache()
    assert get_provider_config("venice")["api_key"] == "sk-dotenv-0003"  # nosec B101
    monkeypatch.delenv("VENICE_API_KEY", raising=False)


def test_placeholder_keys_are_dropped(monkeypatch):
    monkeypatch.setenv("VENICE_API_KEY", "your-key-placeholder")
    assert "api_key" not in get_provider_config("venice")  # nosec B101
    assert "api_key" not in get_provider_config("venice", {"api_key": "test_123"})  # nosec B101


def test_alias_env_var(monkeypatch):
    monkeypatch.setenv("VENICE_AI_API_KEY", "sk-alias-0004")
    assert resolve_provider_key("venice") == ("sk-alias-0004", "VENICE_AI_API_KEY")  # nosec B101
    assert list(get_env_var_candidates("venice")) == ["VENICE_API_KEY", "VENICE_AI_API_KEY"]  # nosec B101


def test_is_placeholder():
    assert is_placeholder(" ChangeMe ")  # nosec B101
    assert is_placeholder("https://example.com")  # nosec B101
    assert not is_placeholder(None)  # nosec B101
    assert not is_placeholder("sk-real-key")  # nosec B101
