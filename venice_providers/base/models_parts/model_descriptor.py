"""
Model descriptor and capability records.

``ModelDescriptor`` carries the pricing and limits used for cost accounting;
``ModelCapabilities`` carries the feature flags that gate request options
(reasoning controls, tool calling, vision). Both are immutable.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelDescriptor:
    """Static description of a Venice model.

    Attributes:
        id: Model identifier sent as ``model`` in requests.
        max_tokens: Maximum completion tokens.
        context_window: Maximum context size in tokens.
        supports_images: Whether image content parts are accepted.
        supports_prompt_cache: Whether the vendor reports cached prompt tokens.
        input_price: USD per million input tokens.
        output_price: USD per million output tokens.
        description: Human-readable summary.
    """

    id: str
    max_tokens: Optional[int] = None
    context_window: Optional[int] = None
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: float = 0.0
    output_price: float = 0.0
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ModelCapabilities:
    """Feature flags for a model id."""

    supports_reasoning: bool = False
    supports_function_calling: bool = False
    supports_vision: bool = False


__all__ = ["ModelDescriptor", "ModelCapabilities"]
