"""Persistent Venice settings for the CLI.

Purpose
-------
Persist the Venice API key, base URL and per-mode (``plan`` / ``act``)
request preferences across sessions, and describe them as an ordered list of
form fields for front ends that render a settings panel.

Settings live in ``$XDG_CONFIG_HOME/venice_providers/settings.json``
(``~/.config`` when the variable is unset).

Public API
----------
- ``VeniceModeSettings`` / ``VeniceSettings``: dataclass containers.
- ``load_settings()`` / ``save_settings(settings)``: JSON read and atomic write.
- ``set_mode_field(settings, mode, field, value)``: validated single-field update.
- ``options_for_mode(settings, mode)``: build ``VeniceOptions`` for a mode.
- ``build_settings_form(settings, mode)``: ordered ``FormField`` list.

Notes
-----
- Unset toggles stay ``None`` on disk and in ``VeniceOptions`` so they are
  omitted from requests. Forms display unset booleans as ``False`` and an
  unset web search mode as ``"auto"``.
"""

from __future__ import annotations

import contextlib
import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...base.logging import get_logger, log_event
from ...config.defaults import (
    CLI_CONFIG_DIR_NAME,
    CLI_SETTINGS_FILE_NAME,
    VENICE_DEFAULT_MODEL,
    VENICE_DEFAULT_WEB_SEARCH,
    VENICE_MODES,
    VENICE_SIGNUP_URL,
    VENICE_WEB_SEARCH_CHOICES,
)
from ...venice.models import VENICE_MODELS, resolve_model, supports_reasoning
from ...venice.options import VeniceOptions


_BOOL_FIELDS = (
    "include_search_results_in_stream",
    "include_venice_system_prompt",
    "strip_thinking_response",
    "disable_thinking",
)


def _xdg_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/venice_providers`` (default ``~/.config``)."""

    root = os.environ.get("XDG_CONFIG_HOME")
    base = Path(root).expanduser() if root else Path.home() / ".config"
    return base / CLI_CONFIG_DIR_NAME


def _config_file_path() -> Path:
    return _xdg_config_dir() / CLI_SETTINGS_FILE_NAME


@dataclass
class VeniceModeSettings:
    """Request preferences for one mode. ``None`` means "not set"."""

    model_id: Optional[str] = None
    enable_web_search: Optional[str] = None
    include_search_results_in_stream: Optional[bool] = None
    include_venice_system_prompt: Optional[bool] = None
    strip_thinking_response: Optional[bool] = None
    disable_thinking: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Any) -> "VeniceModeSettings":
        """Build from loaded JSON, discarding values of the wrong type."""
        if not isinstance(data, dict):
            return cls()
        model_id = data.get("model_id")
        web = data.get("enable_web_search")
        out = cls(
            model_id=str(model_id) if model_id else None,
            enable_web_search=web if web in VENICE_WEB_SEARCH_CHOICES else None,
        )
        for name in _BOOL_FIELDS:
            val = data.get(name)
            if isinstance(val, bool):
                setattr(out, name, val)
        return out


@dataclass
class VeniceSettings:
    """Container for persisted Venice preferences.

    Attributes
    ----------
    api_key: Optional[str]
        Stored key. When set it is passed as an explicit override and wins
        over ``VENICE_API_KEY``.
    base_url: Optional[str]
        Custom API endpoint.
    plan, act: VeniceModeSettings
        Per-mode preferences.
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    plan: VeniceModeSettings = field(default_factory=VeniceModeSettings)
    act: VeniceModeSettings = field(default_factory=VeniceModeSettings)

    def mode(self, mode: str) -> VeniceModeSettings:
        """Return the section for ``mode`` (``plan`` or ``act``)."""
        if mode not in VENICE_MODES:
            raise ValueError(f"unknown mode '{mode}' (expected one of {', '.join(VENICE_MODES)})")
        return self.plan if mode == "plan" else self.act


def load_settings() -> VeniceSettings:
    """Load settings from disk, or defaults when absent or unreadable."""

    cfg_path = _config_file_path()
    with contextlib.suppress(OSError, ValueError):
        if cfg_path.is_file():
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return VeniceSettings(
                    api_key=(str(data["api_key"]) if data.get("api_key") else None),
                    base_url=(str(data["base_url"]) if data.get("base_url") else None),
                    plan=VeniceModeSettings.from_dict(data.get("plan")),
                    act=VeniceModeSettings.from_dict(data.get("act")),
                )
    return VeniceSettings()


def save_settings(settings: VeniceSettings) -> Tuple[bool, Optional[str]]:
    """Persist settings atomically.

    Returns
    -------
    (ok, error)
        Success flag and optional error message.
    """

    try:
        cfg_dir = _xdg_config_dir()
        cfg_dir.mkdir(parents=True, exist_ok=True)
        cfg_path = _config_file_path()
        tmp_path = cfg_path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(asdict(settings), ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, cfg_path)
        return True, None
    except OSError as exc:  # pragma: no cover - environment-specific
        return False, str(exc)


def _coerce_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    val = str(value).strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    if val in {"0", "f", "false", "n", "no", "off"}:
        return False
    if val in {"", "none", "unset"}:
        return None
    raise ValueError(f"expected a boolean, got '{value}'")


def set_mode_field(settings: VeniceSettings, mode: str, name: str, value: Any) -> VeniceSettings:
    """Validate and assign one per-mode field; ``None`` clears it.

    Raises
    ------
    ValueError
        Unknown mode, unknown field, or a value of the wrong shape.
    """

    section = settings.mode(mode)
    known = {f.name for f in fields(VeniceModeSettings)}
    if name not in known:
        raise ValueError(f"unknown field '{name}' (expected one of {', '.join(sorted(known))})")
    if name == "enable_web_search":
        if value is not None and value not in VENICE_WEB_SEARCH_CHOICES:
            raise ValueError(f"enable_web_search must be one of {', '.join(VENICE_WEB_SEARCH_CHOICES)}")
    elif name == "model_id":
        value = str(value) if value else None
    else:
        value = _coerce_bool(value)
    setattr(section, name, value)
    log_event(get_logger("cli.settings"), "cli.settings.set", mode=mode, field=name, value_set=value is not None)
    return settings


def options_for_mode(settings: VeniceSettings, mode: str) -> VeniceOptions:
    """Translate stored preferences for ``mode`` into adapter options."""

    section = settings.mode(mode)
    return VeniceOptions(
        api_key=settings.api_key,
        base_url=settings.base_url,
        model_id=section.model_id,
        enable_web_search=section.enable_web_search,
        include_search_results_in_stream=section.include_search_results_in_stream,
        include_venice_system_prompt=section.include_venice_system_prompt,
        strip_thinking_response=section.strip_thinking_response,
        disable_thinking=section.disable_thinking,
    )


@dataclass
class FormField:
    """One settings control.

    ``kind`` is ``password``, ``select``, ``info``, ``dropdown`` or
    ``checkbox``; ``key`` names the settings attribute the control edits.
    """

    key: str
    kind: str
    label: str
    value: Any = None
    options: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_settings_form(settings: VeniceSettings, mode: str, *, show_model_options: bool = True) -> List[FormField]:
    """Describe the Venice settings panel for ``mode`` as ordered fields.

    The search-results checkbox is present only while web search is not
    ``off``; the thinking checkboxes only for reasoning-capable models.
    """

    section = settings.mode(mode)
    form = [
        FormField(
            key="api_key",
            kind="password",
            label="Venice API Key",
            value=settings.api_key or "",
            description=f"Get an API key at {VENICE_SIGNUP_URL}",
        )
    ]
    if not show_model_options:
        return form

    model_id, info = resolve_model(section.model_id or VENICE_DEFAULT_MODEL)
    web_search = section.enable_web_search or VENICE_DEFAULT_WEB_SEARCH
    form += [
        FormField(key="model_id", kind="select", label="Model", value=model_id, options=list(VENICE_MODELS)),
        FormField(key="model_info", kind="info", label="Model info", value=info.to_dict(), description=info.description),
        FormField(
            key="enable_web_search",
            kind="dropdown",
            label="Web Search",
            value=web_search,
            options=list(VENICE_WEB_SEARCH_CHOICES),
        ),
    ]
    if web_search != "off":
        form.append(
            FormField(
                key="include_search_results_in_stream",
                kind="checkbox",
                label="Include search results in stream",
                value=bool(section.include_search_results_in_stream),
            )
        )
    form.append(
        FormField(
            key="include_venice_system_prompt",
            kind="checkbox",
            label="Include Venice system prompt",
            value=bool(section.include_venice_system_prompt),
        )
    )
    if supports_reasoning(model_id):
        form += [
            FormField(
                key="strip_thinking_response",
                kind="checkbox",
                label="Strip thinking from response",
                value=bool(section.strip_thinking_response),
            ),
            FormField(
                key="disable_thinking",
                kind="checkbox",
                label="Disable thinking mode",
                value=bool(section.disable_thinking),
            ),
        ]
    return form


__all__ = [
    "VeniceModeSettings",
    "VeniceSettings",
    "FormField",
    "load_settings",
    "save_settings",
    "set_mode_field",
    "options_for_mode",
    "build_settings_form",
]
