"""Tests for the Venice model listing fetcher (``requests`` is monkeypatched)."""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from venice_providers.base.errors import ErrorCode, RequestFailed
from venice_providers.venice import get_venice_models
from venice_providers.venice.get_venice_models import descriptor_from_listing, fetch_models
from venice_providers.venice.models import VENICE_MODELS


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


LISTING = {
    "object": "list",
    "data": [
        {
            "id": "qwen3-4b",
            "model_spec": {
                "availableContextTokens": 40960,
                "maxCompletionTokens": 8192,
                "name": "Venice Small",
                "capabilities": {"supportsVision": False, "supportsPromptCache": True},
                "pricing": {"input": {"usd": 0.05}, "output": {"usd": 0.15}},
            },
        },
        {"id": "bare-model"},
        "not-a-dict",
    ],
}


def _patch_get(monkeypatch, response: _FakeResponse) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_get(url, headers=None, timeout=None):
        calls.append({"url": url, "headers": headers, "timeout": timeout})
        return response

    monkeypatch.setattr(requests, "get", fake_get)
    return calls


def test_fetch_models_maps_listing(monkeypatch):
    calls = _patch_get(monkeypatch, _FakeResponse(payload=LISTING))
    models = fetch_models("sk-venice-abc", "https://venice.test/api/v1/")

    assert [m.id for m in models] == ["qwen3-4b", "bare-model"]  # nosec B101
    small = models[0]
    assert (small.context_window, small.max_tokens) == (40960, 8192)  # nosec B101
    assert (small.input_price, small.output_price) == (0.05, 0.15)  # nosec B101
    assert small.supports_prompt_cache and not small.supports_images  # nosec B101
    assert small.description == "Venice Small"  # nosec B101
    assert calls[0]["url"] == "https://venice.test/api/v1/models"  # nosec B101
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-venice-abc"  # nosec B101
    assert calls[0]["timeout"] == 30.0  # nosec B101


def test_descriptor_defaults_for_missing_vendor_fields():
    desc = descriptor_from_listing({"id": "x", "model_spec": {"pricing": {"input": "free", "output": {"usd": -1}}}})
    assert desc.id == "x"  # nosec B101
    assert desc.max_tokens is None and desc.context_window is None  # nosec B101
    assert (desc.input_price, desc.output_price) == (0.0, 0.0)  # nosec B101
    assert not desc.supports_images and not desc.supports_prompt_cache  # nosec B101


def test_fetch_models_http_error_raises_request_failed(monkeypatch):
    _patch_get(monkeypatch, _FakeResponse(status_code=401, text="unauthorized"))
    with pytest.raises(RequestFailed) as ei:
        fetch_models("sk-venice-abc")
    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert ei.value.status_code == 401  # nosec B101
    assert ei.value.body == "unauthorized"  # nosec B101


def test_fetch_models_transport_error_raises_request_failed(monkeypatch):
    def boom(*_a, **_k):
        raise requests.ConnectTimeout("connect timed out")

    monkeypatch.setattr(requests, "get", boom)
    with pytest.raises(RequestFailed) as ei:
        fetch_models("sk-venice-abc")
    assert ei.value.code is ErrorCode.TIMEOUT  # nosec B101
    assert ei.value.retryable  # nosec B101


def test_run_falls_back_to_static_table(monkeypatch, fake_logger):
    _patch_get(monkeypatch, _FakeResponse(status_code=503, text="down"))
    monkeypatch.setattr(get_venice_models, "_logger", fake_logger)
    models = get_venice_models.run()
    assert [m.id for m in models] == list(VENICE_MODELS)  # nosec B101
    (event,) = fake_logger.events("models.fetch_error")
    assert event["code"] == "unavailable"  # nosec B101


def test_run_returns_live_listing(monkeypatch):
    monkeypatch.setenv("VENICE_API_KEY", "sk-venice-live")
    calls = _patch_get(monkeypatch, _FakeResponse(payload=LISTING))
    models = get_venice_models.run()
    assert models[0].id == "qwen3-4b"  # nosec B101
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-venice-live"  # nosec B101
