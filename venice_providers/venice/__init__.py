"""
Venice provider package.

Exports:
- VeniceProvider: streaming chat adapter for the Venice API
- VeniceOptions: typed adapter configuration
- model table helpers (``resolve_model``, ``supports_reasoning``)
"""

from .client import VeniceProvider
from .models import MODEL_CAPABILITIES, VENICE_MODELS, get_capabilities, resolve_model, supports_reasoning
from .options import VeniceOptions, WebSearchMode

__all__ = [
    "VeniceProvider",
    "VeniceOptions",
    "WebSearchMode",
    "VENICE_MODELS",
    "MODEL_CAPABILITIES",
    "resolve_model",
    "get_capabilities",
    "supports_reasoning",
]
