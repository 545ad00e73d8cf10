"""
Structured message content.

``base.utils.openai_format`` turns these parts into the OpenAI-compatible
wire shapes Venice accepts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

ContentPartType = Literal[
    "text",
    "image",        # data: {"media_type", "data"} (base64) or {"url"}
    "tool_call",    # data: {"id", "name", "arguments"}; assistant turns only
    "tool_result",  # data: {"tool_call_id"}; result text in ``text``
]


@dataclass
class ContentPart:
    """A single part of a message.

    ``text`` holds readable content (text parts, tool results); ``data``
    holds the structured payload of the other kinds.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


__all__ = [
    "ContentPart",
    "ContentPartType",
]
