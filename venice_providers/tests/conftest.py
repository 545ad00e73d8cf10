"""Pytest configuration for the Venice adapter test suite.

Every test starts from an environment without Venice credentials or config
overrides, with fresh config caches and an empty HTTP client pool, so that a
developer's real ``VENICE_API_KEY`` or ``.env`` never leaks into assertions.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List

import pytest

from venice_providers.base.http import close_all_clients
from venice_providers.config import reset_config_cache

_ENV_VARS = (
    "VENICE_API_KEY",
    "VENICE_AI_API_KEY",
    "VENICE_MODEL",
    "VENICE_BASE_URL",
    "PROVIDERS_CONFIG_FILE",
    "VENICE_TIMEOUT_CONNECT_SECONDS",
    "VENICE_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear Venice env vars, point dotenv and XDG config at ``tmp_path``."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


class FakeLogger:
    """Collect structured events emitted through ``log_event``."""

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802 - logging API
        return True

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append({"level": level, **json.loads(msg)})

    def events(self, name: str) -> List[Dict[str, Any]]:
        return [r for r in self.records if r.get("event") == name]


@pytest.fixture()
def fake_logger() -> FakeLogger:
    return FakeLogger()
