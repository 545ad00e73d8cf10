"""Static Venice model tables and model resolution.

``VENICE_MODELS`` holds pricing and limits (USD per million tokens);
``MODEL_CAPABILITIES`` holds the feature flags that gate request options.
Both are read-only module state shared by every adapter instance.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..base.models import ModelCapabilities, ModelDescriptor
from ..config.defaults import VENICE_DEFAULT_MODEL


VENICE_MODELS: Mapping[str, ModelDescriptor] = MappingProxyType(
    {
        "qwen3-235b": ModelDescriptor(
            id="qwen3-235b",
            max_tokens=32768,
            context_window=131072,
            supports_images=False,
            supports_prompt_cache=True,
            input_price=0.9,
            output_price=4.5,
            description="Venice Large 1.1 - Most powerful flagship model with advanced reasoning capabilities",
        ),
        "mistral-31-24b": ModelDescriptor(
            id="mistral-31-24b",
            max_tokens=32768,
            context_window=131072,
            supports_images=True,
            supports_prompt_cache=True,
            input_price=0.5,
            output_price=2.0,
            description="Venice Medium (3.1) - Vision + function calling",
        ),
        "qwen3-4b": ModelDescriptor(
            id="qwen3-4b",
            max_tokens=8192,
            context_window=40960,
            supports_images=False,
            supports_prompt_cache=True,
            input_price=0.05,
            output_price=0.15,
            description="Venice Small - Fast, affordable for most tasks",
        ),
        "venice-uncensored": ModelDescriptor(
            id="venice-uncensored",
            max_tokens=8192,
            context_window=32768,
            supports_images=False,
            supports_prompt_cache=True,
            input_price=0.2,
            output_price=0.9,
            description="Venice Uncensored 1.1 - No content filtering",
        ),
    }
)


MODEL_CAPABILITIES: Mapping[str, ModelCapabilities] = MappingProxyType(
    {
        "qwen3-235b": ModelCapabilities(supports_reasoning=True, supports_function_calling=True),
        "mistral-31-24b": ModelCapabilities(supports_function_calling=True, supports_vision=True),
        "qwen3-4b": ModelCapabilities(supports_reasoning=True, supports_function_calling=True),
        "venice-uncensored": ModelCapabilities(),
    }
)

_NO_CAPABILITIES = ModelCapabilities()


def resolve_model(
    model_id: Optional[str],
    table: Mapping[str, ModelDescriptor] = VENICE_MODELS,
    default_id: str = VENICE_DEFAULT_MODEL,
) -> Tuple[str, ModelDescriptor]:
    """Return ``(id, descriptor)`` for ``model_id``, or the default entry.

    Unknown or empty ids fall back to ``default_id``; ``default_id`` must be
    present in ``table``.
    """
    if model_id and model_id in table:
        return model_id, table[model_id]
    return default_id, table[default_id]


def resolve_model_override(model_id: str, info: ModelDescriptor) -> Tuple[str, ModelDescriptor]:
    """Pair a caller-supplied descriptor (e.g. fetched from ``/models``) with its id."""
    return model_id, info


def get_capabilities(model_id: Optional[str]) -> ModelCapabilities:
    """Return the capability record for ``model_id`` (all-false when unknown)."""
    return MODEL_CAPABILITIES.get(model_id or "", _NO_CAPABILITIES)


def supports_reasoning(model_id: Optional[str]) -> bool:
    """True when the model accepts the thinking controls."""
    return get_capabilities(model_id).supports_reasoning


__all__ = [
    "VENICE_MODELS",
    "MODEL_CAPABILITIES",
    "resolve_model",
    "resolve_model_override",
    "get_capabilities",
    "supports_reasoning",
]
