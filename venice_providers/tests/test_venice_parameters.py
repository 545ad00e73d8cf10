"""Unit tests for Venice request building (no I/O)."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from venice_providers.venice import VeniceOptions, VeniceProvider


def _params(model: str, **opts) -> dict:
    provider = VeniceProvider(VeniceOptions(api_key="sk-venice-abc", model_id=model, **opts))
    return provider._build_payload(model, [])


def test_unset_options_omit_venice_parameters():
    payload = _params("qwen3-4b")
    assert "venice_parameters" not in payload  # nosec B101
    assert payload["stream_options"] == {"include_usage": True}  # nosec B101


def test_explicit_false_values_are_sent():
    payload = _params("venice-uncensored", include_venice_system_prompt=False)
    assert payload["venice_parameters"] == {"include_venice_system_prompt": False}  # nosec B101


def test_search_results_dropped_when_web_search_off():
    payload = _params("venice-uncensored", enable_web_search="off", include_search_results_in_stream=True)
    assert payload["venice_parameters"] == {"enable_web_search": "off"}  # nosec B101


@pytest.mark.parametrize("mode", ["auto", "on"])
def test_search_results_sent_when_web_search_not_off(mode):
    payload = _params("venice-uncensored", enable_web_search=mode, include_search_results_in_stream=True)
    assert payload["venice_parameters"] == {  # nosec B101
        "enable_web_search": mode,
        "include_search_results_in_stream": True,
    }


def test_search_results_sent_when_web_search_unset():
    payload = _params("venice-uncensored", include_search_results_in_stream=False)
    assert payload["venice_parameters"] == {"include_search_results_in_stream": False}  # nosec B101


@pytest.mark.parametrize("model", ["qwen3-4b", "qwen3-235b"])
def test_thinking_controls_sent_for_reasoning_models(model):
    payload = _params(model, strip_thinking_response=True, disable_thinking=False)
    assert payload["venice_parameters"] == {  # nosec B101
        "strip_thinking_response": True,
        "disable_thinking": False,
    }


@pytest.mark.parametrize("model", ["mistral-31-24b", "venice-uncensored", "unknown-model"])
def test_thinking_controls_dropped_for_other_models(model):
    payload = _params(model, strip_thinking_response=True, disable_thinking=True)
    assert "venice_parameters" not in payload  # nosec B101


def test_invalid_web_search_value_rejected():
    with pytest.raises(ValidationError):
        VeniceOptions(enable_web_search="sometimes")


def test_unknown_option_rejected():
    with pytest.raises(ValidationError):
        VeniceOptions(temperature=0.2)


def test_headers_carry_bearer_token():
    provider = VeniceProvider(api_key="sk-venice-abc")
    headers = provider._build_headers()
    assert headers["Authorization"] == "Bearer sk-venice-abc"  # nosec B101
    assert headers["Accept"] == "text/event-stream"  # nosec B101
