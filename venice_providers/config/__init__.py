"""Configuration for the Venice adapter.

``get_provider_config`` merges four layers, later layers winning:

1. built-in defaults (``config.defaults``)
2. the provider's section of the file named by ``PROVIDERS_CONFIG_FILE``
   (``.json`` is parsed as JSON, anything else as YAML)
3. ``VENICE_MODEL`` / ``VENICE_BASE_URL`` and the API key variables from
   ``config.env``
4. explicit overrides (``None`` values are ignored)

Before the environment is read, ``KEY=VALUE`` lines from the dotenv file
(``DOTENV_FILE``, default ``.env``) are loaded once. A loaded value only
replaces an existing variable that holds a placeholder.

Example config file::

    venice:
      model: qwen3-235b
      base_url: https://api.venice.ai/api/v1
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import PROVIDER_NAME, VENICE_DEFAULT_BASE_URL, VENICE_DEFAULT_MODEL
from .env import is_placeholder, resolve_provider_key

DEFAULTS: Dict[str, Dict[str, Any]] = {
    PROVIDER_NAME: {"model": VENICE_DEFAULT_MODEL, "base_url": VENICE_DEFAULT_BASE_URL},
}

# config key -> environment variable suffix (``VENICE_<SUFFIX>``)
ENV_FIELD_MAP = {"model": "MODEL", "base_url": "BASE_URL"}

_state: Dict[str, Any] = {"file": None, "dotenv_loaded": False}


def _parse_dotenv(text: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            values[key] = value.strip().strip("\"'")
    return values


def _load_dotenv_once() -> None:
    if _state["dotenv_loaded"]:
        return
    _state["dotenv_loaded"] = True
    path = Path(os.getenv("DOTENV_FILE", ".env"))
    if not path.is_file():
        return
    for key, value in _parse_dotenv(path.read_text(encoding="utf-8")).items():
        if key not in os.environ or is_placeholder(os.environ[key]):
            os.environ[key] = value


def _parse_config_file(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (ValueError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _file_config() -> Dict[str, Any]:
    if _state["file"] is None:
        path = os.getenv("PROVIDERS_CONFIG_FILE")
        _state["file"] = _parse_config_file(Path(path)) if path and Path(path).is_file() else {}
    return _state["file"]


def reset_config_cache() -> None:
    """Re-read the config file and dotenv on next use (tests, reloads)."""
    _state["file"] = None
    _state["dotenv_loaded"] = False


def _env_layer(provider: str) -> Dict[str, Any]:
    layer = {
        field: os.environ[f"{provider.upper()}_{suffix}"]
        for field, suffix in ENV_FIELD_MAP.items()
        if os.environ.get(f"{provider.upper()}_{suffix}")
    }
    key, _ = resolve_provider_key(provider)
    if key:
        layer["api_key"] = key
    return layer


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``provider``.

    A placeholder ``api_key`` from any layer is dropped, so callers only need
    to test for presence.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    section = _file_config().get(name)
    layers = (
        DEFAULTS.get(name, {}),
        section if isinstance(section, dict) else {},
        _env_layer(name),
        {k: v for k, v in (overrides or {}).items() if v is not None},
    )
    cfg: Dict[str, Any] = {}
    for layer in layers:
        cfg.update(layer)
    if is_placeholder(cfg.get("api_key")):
        del cfg["api_key"]
    return cfg


__all__ = [
    "get_provider_config",
    "reset_config_cache",
    "DEFAULTS",
]
