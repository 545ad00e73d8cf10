"""Message conversion into the OpenAI-compatible chat schema.

Maps ``Message`` / ``ContentPart`` DTOs to the ``messages`` array accepted by
OpenAI-compatible ``/chat/completions`` endpoints:

- plain string content is passed through;
- text and image parts become ``{"type": "text"}`` / ``{"type": "image_url"}``
  content items (base64 images are sent as ``data:`` URLs);
- ``tool_call`` parts on assistant messages become ``tool_calls``;
- ``tool_result`` parts become separate ``{"role": "tool"}`` messages placed
  before the remaining content of the same message.

Helpers here are pure: no I/O, no logging.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..models import ContentPart, Message


def _image_url(part: ContentPart) -> Optional[str]:
    data = part.data or {}
    if url := data.get("url"):
        return str(url)
    if payload := data.get("data"):
        media_type = data.get("media_type") or "image/png"
        return f"data:{media_type};base64,{payload}"
    return None


def _content_item(part: ContentPart) -> Optional[Dict[str, Any]]:
    """Return the content item for a text or image part, ``None`` otherwise."""
    if part.type == "text":
        return {"type": "text", "text": part.text or ""}
    if part.type == "image":
        url = _image_url(part)
        return {"type": "image_url", "image_url": {"url": url}} if url else None
    return None


def _tool_call(part: ContentPart) -> Dict[str, Any]:
    data = part.data or {}
    arguments = data.get("arguments", {})
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments, ensure_ascii=False)
    return {
        "id": str(data.get("id", "")),
        "type": "function",
        "function": {"name": str(data.get("name", "")), "arguments": arguments},
    }


def _simplify(items: List[Dict[str, Any]]) -> Any:
    """Collapse a text-only item list into a plain string."""
    if all(i["type"] == "text" for i in items):
        return "\n".join(i["text"] for i in items)
    return items


def convert_message(message: Message) -> List[Dict[str, Any]]:
    """Convert one message; tool results may expand it into several."""
    if isinstance(message.content, str):
        return [{"role": message.role, "content": message.content}]

    out: List[Dict[str, Any]] = []
    items: List[Dict[str, Any]] = []
    tool_calls: List[Dict[str, Any]] = []
    for part in message.content:
        if part.type == "tool_result":
            call_id = str((part.data or {}).get("tool_call_id", ""))
            out.append({"role": "tool", "tool_call_id": call_id, "content": part.text or ""})
        elif part.type == "tool_call":
            if message.role == "assistant":
                tool_calls.append(_tool_call(part))
        elif (item := _content_item(part)) is not None:
            items.append(item)

    if message.role == "assistant":
        if items or tool_calls:
            entry: Dict[str, Any] = {
                "role": "assistant",
                # assistant content must be a string in the OpenAI schema
                "content": "\n".join(i["text"] for i in items if i["type"] == "text") or None,
            }
            if tool_calls:
                entry["tool_calls"] = tool_calls
            out.append(entry)
    elif items:
        out.append({"role": message.role, "content": _simplify(items)})
    return out


def to_openai_messages(system_prompt: Optional[str], messages: List[Message]) -> List[Dict[str, Any]]:
    """Build the request ``messages`` array.

    Parameters:
        system_prompt: Content of the leading system message, always sent
            (``None`` becomes an empty string).
        messages: Conversation in the vendor-agnostic schema. Non-``Message``
            items are ignored.

    Returns:
        A list of role/content dicts ready for JSON serialization.
    """
    out: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt or ""}]
    for m in messages:
        if isinstance(m, Message):
            out.extend(convert_message(m))
    return out


__all__ = ["to_openai_messages", "convert_message"]
