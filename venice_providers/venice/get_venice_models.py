"""
Venice: get models

Behavior
- Fetches the model listing via ``GET {base_url}/models`` (bearer auth) and
  maps each entry into a ``ModelDescriptor``. Vendor fields that are absent or
  malformed get conservative defaults (no images, no cache, zero prices).
- ``run()`` resolves credentials from provider config and falls back to the
  static table when the listing cannot be fetched.

Venice entry shape (fields read, all optional except ``id``)::

    {"id": "qwen3-4b",
     "model_spec": {"availableContextTokens": 40960,
                    "maxCompletionTokens": 8192,
                    "name": "Venice Small",
                    "description": "...",
                    "capabilities": {"supportsVision": false,
                                     "supportsPromptCache": true},
                    "pricing": {"input": {"usd": 0.05},
                                "output": {"usd": 0.15}}}}
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

import requests

from ..base.errors import RETRYABLE_CODES, ProviderError, RequestFailed, classify_exception, code_for_status
from ..base.logging import get_logger, log_event
from ..base.models import ModelDescriptor
from ..base.timeouts import get_timeout_config
from ..config import get_provider_config
from ..config.defaults import PROVIDER_NAME, VENICE_DEFAULT_BASE_URL
from .models import VENICE_MODELS

_logger = get_logger("providers.venice.models")


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and value > 0:
        return int(value)
    return None


def _usd(price: Any) -> float:
    """Read ``{"usd": x}`` (or a bare number) as a non-negative float."""
    if isinstance(price, Mapping):
        price = price.get("usd")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return 0.0
    return float(price) if price >= 0 else 0.0


def descriptor_from_listing(item: Mapping[str, Any]) -> ModelDescriptor:
    """Map one ``/models`` entry into a ``ModelDescriptor``."""
    meta = item.get("model_spec")
    meta = meta if isinstance(meta, Mapping) else {}
    caps = meta.get("capabilities")
    caps = caps if isinstance(caps, Mapping) else {}
    pricing = meta.get("pricing")
    pricing = pricing if isinstance(pricing, Mapping) else {}
    return ModelDescriptor(
        id=str(item.get("id") or item.get("model") or item.get("name") or "unknown"),
        max_tokens=_int_or_none(meta.get("maxCompletionTokens")),
        context_window=_int_or_none(meta.get("availableContextTokens") or item.get("context_length")),
        supports_images=caps.get("supportsVision") is True,
        supports_prompt_cache=caps.get("supportsPromptCache") is True,
        input_price=_usd(pricing.get("input")),
        output_price=_usd(pricing.get("output")),
        description=str(meta.get("description") or meta.get("name") or ""),
    )


def _request_failed(e: Exception) -> RequestFailed:
    code = classify_exception(e)
    return RequestFailed(
        code=code,
        message=str(e) or type(e).__name__,
        provider=PROVIDER_NAME,
        retryable=code in RETRYABLE_CODES,
        raw=e,
    )


def fetch_models(api_key: Optional[str], base_url: str = VENICE_DEFAULT_BASE_URL) -> List[ModelDescriptor]:
    """Fetch and normalize the Venice model listing.

    Raises:
        RequestFailed: transport failure or non-success HTTP status.
    """
    url = base_url.rstrip("/") + "/models"
    headers = {"Accept": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    try:
        resp = requests.get(url, headers=headers, timeout=get_timeout_config().http_timeout_seconds)
    except requests.RequestException as e:
        raise _request_failed(e) from e
    if not resp.ok:
        code = code_for_status(resp.status_code)
        raise RequestFailed(
            code=code,
            message=f"HTTP {resp.status_code} listing models",
            provider=PROVIDER_NAME,
            retryable=code in RETRYABLE_CODES,
            status_code=resp.status_code,
            body=resp.text,
        )
    try:
        data = resp.json()
    except ValueError as e:
        raise _request_failed(e) from e
    raw = data.get("data", []) if isinstance(data, dict) else data
    return [descriptor_from_listing(it) for it in raw or [] if isinstance(it, Mapping)]


def run() -> List[ModelDescriptor]:
    """Return the live listing, or the static table when it cannot be fetched."""
    cfg = get_provider_config(PROVIDER_NAME)
    try:
        if models := fetch_models(cfg.get("api_key"), cfg.get("base_url") or VENICE_DEFAULT_BASE_URL):
            return models
    except ProviderError as e:
        log_event(_logger, "models.fetch_error", code=e.code.value, error=e.message)
    return list(VENICE_MODELS.values())


if __name__ == "__main__":
    print(f"[venice] loaded {len(run())} models")
