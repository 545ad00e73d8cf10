"""Request builders for the Venice provider.

Consumers must define ``_api_key`` (str) and ``_options`` (``VeniceOptions``).
Nothing here performs I/O.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import Message
from ..base.utils.openai_format import to_openai_messages
from .models import supports_reasoning


class VeniceCommonMixin:
    """Mixin offering payload/header builders for Venice chat completions."""

    def _build_messages(self, system_prompt: Optional[str], messages: List[Message]) -> List[Dict[str, Any]]:
        """System prompt first, then the converted conversation."""
        return to_openai_messages(system_prompt, messages)

    def _build_venice_parameters(self, model_id: str) -> Dict[str, Any]:
        """Collect the explicitly set Venice toggles.

        ``include_search_results_in_stream`` is dropped when web search is
        ``"off"``; thinking controls are sent only for reasoning models.
        """
        opts = self._options
        params: Dict[str, Any] = {}
        if opts.enable_web_search is not None:
            params["enable_web_search"] = opts.enable_web_search
        if opts.include_search_results_in_stream is not None and opts.enable_web_search != "off":
            params["include_search_results_in_stream"] = opts.include_search_results_in_stream
        if opts.include_venice_system_prompt is not None:
            params["include_venice_system_prompt"] = opts.include_venice_system_prompt
        if supports_reasoning(model_id):
            if opts.strip_thinking_response is not None:
                params["strip_thinking_response"] = opts.strip_thinking_response
            if opts.disable_thinking is not None:
                params["disable_thinking"] = opts.disable_thinking
        return params

    def _build_payload(self, model_id: str, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Assemble the JSON body for a streaming ``/chat/completions`` call."""
        payload: Dict[str, Any] = {
            "model": model_id,
            "messages": messages,
            "stream": True,
            "stream_options": {"include_usage": True},
        }
        if venice_parameters := self._build_venice_parameters(model_id):
            payload["venice_parameters"] = venice_parameters
        return payload

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "text/event-stream",
        }


__all__ = ["VeniceCommonMixin"]
