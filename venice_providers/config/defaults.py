"""venice_providers.config.defaults
=================================

Small, stable default values used across the package and the CLI. They can be
overridden via environment variables or an external config file.

This module must not import from other package modules (no cycles); only
plain constants live here.
"""

from __future__ import annotations

PROVIDER_NAME = "venice"

# ---- Venice API ----
VENICE_DEFAULT_BASE_URL = "https://api.venice.ai/api/v1"
VENICE_DEFAULT_MODEL = "venice-uncensored"
VENICE_SIGNUP_URL = "https://venice.ai"

# ---- Settings ----
# Assistant modes with independent model/parameter selections.
VENICE_MODES = ("plan", "act")
VENICE_DEFAULT_MODE = "act"
# Web search choices accepted by ``venice_parameters.enable_web_search``.
VENICE_WEB_SEARCH_CHOICES = ("auto", "on", "off")
VENICE_DEFAULT_WEB_SEARCH = "auto"

# ---- CLI ----
CLI_CONFIG_DIR_NAME = "venice_providers"
CLI_SETTINGS_FILE_NAME = "settings.json"


__all__ = [
    "PROVIDER_NAME",
    "VENICE_DEFAULT_BASE_URL",
    "VENICE_DEFAULT_MODEL",
    "VENICE_SIGNUP_URL",
    "VENICE_MODES",
    "VENICE_DEFAULT_MODE",
    "VENICE_WEB_SEARCH_CHOICES",
    "VENICE_DEFAULT_WEB_SEARCH",
    "CLI_CONFIG_DIR_NAME",
    "CLI_SETTINGS_FILE_NAME",
]
