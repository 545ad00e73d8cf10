"""Typed chunks emitted by the streaming decoder.

``StreamChunk`` is a tagged union of :class:`TextChunk` and
:class:`UsageChunk`; the ``type`` field carries the tag so callers can branch
on it without ``isinstance`` checks when chunks are serialized.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Union


@dataclass(frozen=True)
class TextChunk:
    """An incremental content fragment."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class UsageChunk:
    """A usage/cost report taken from a ``usage`` object in the stream.

    Token counts are the vendor's figures; ``total_cost`` is computed locally
    from the resolved model's per-million-token prices.
    """

    input_tokens: int
    output_tokens: int
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0
    total_cost: float = 0.0
    type: Literal["usage"] = "usage"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


StreamChunk = Union[TextChunk, UsageChunk]


__all__ = ["TextChunk", "UsageChunk", "StreamChunk"]
