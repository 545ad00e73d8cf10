"""Credential environment variables for the Venice adapter.

``API_KEY_ENV`` lists, per provider, the variables that may hold its API key
in precedence order. The first entry is the canonical name shown to users.
Lookups never raise: unknown providers and unset variables resolve to
``None``.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

API_KEY_ENV: Dict[str, Tuple[str, ...]] = {
    "venice": ("VENICE_API_KEY", "VENICE_AI_API_KEY"),
}

# Substrings (or the ``test_`` prefix) marking sample credentials
PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")
PLACEHOLDER_PREFIX = "test_"


def is_placeholder(val: Optional[str]) -> bool:
    """True for values that look like sample credentials rather than real ones."""
    if val is None:
        return False
    v = str(val).strip().lower()
    return v.startswith(PLACEHOLDER_PREFIX) or any(marker in v for marker in PLACEHOLDER_MARKERS)


def get_env_var_candidates(provider: str) -> Iterable[str]:
    return iter(API_KEY_ENV.get((provider or "").lower(), ()))


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first usable key in the environment.

    Empty and placeholder values are skipped; ``(None, None)`` when none is
    usable.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "API_KEY_ENV",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
