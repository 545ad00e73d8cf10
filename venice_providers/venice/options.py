"""Typed configuration object for the Venice adapter.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Every Venice toggle defaults to ``None`` meaning "not set": only explicitly
set toggles are sent in ``venice_parameters``.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from ..base.models import ModelDescriptor


WebSearchMode = Literal["auto", "on", "off"]


class VeniceOptions(BaseModel):
    """Venice adapter configuration.

    Attributes
    ----------
    api_key:
        Venice API key. Falls back to ``VENICE_API_KEY`` / config file.
    base_url:
        Custom API base URL; defaults to the production endpoint.
    model_id:
        Requested model id; unknown ids resolve to the default model.
    model_info:
        Full descriptor supplied by the caller (e.g. from a ``/models``
        listing); takes precedence over the static table.
    enable_web_search:
        ``"auto"``, ``"on"`` or ``"off"``.
    include_search_results_in_stream:
        Ask Venice to stream search results; ignored when web search is off.
    include_venice_system_prompt:
        Prepend Venice's own system prompt.
    strip_thinking_response, disable_thinking:
        Thinking controls; sent only for reasoning-capable models.
    """

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_id: Optional[str] = None
    model_info: Optional[ModelDescriptor] = None
    enable_web_search: Optional[WebSearchMode] = None
    include_search_results_in_stream: Optional[bool] = None
    include_venice_system_prompt: Optional[bool] = None
    strip_thinking_response: Optional[bool] = None
    disable_thinking: Optional[bool] = None


__all__ = ["VeniceOptions", "WebSearchMode"]
