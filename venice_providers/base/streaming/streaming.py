"""Stream accumulation helper.

Callers that need the whole response (or the partial response produced before
an interruption) fold the chunks into a :class:`StreamResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .stream_chunks import StreamChunk, TextChunk, UsageChunk


@dataclass
class StreamResult:
    """Aggregated view of a chunk sequence.

    Fields:
      usage: the last usage chunk seen (vendors report cumulative figures)
      chunks: number of chunks consumed

    ``text`` joins the text deltas when read; ``add`` only appends.
    """

    usage: Optional[UsageChunk] = None
    chunks: int = 0
    _parts: List[str] = field(default_factory=list, repr=False)

    @property
    def text(self) -> str:
        """Concatenated text deltas received so far."""
        return "".join(self._parts)

    def add(self, chunk: StreamChunk) -> None:
        self.chunks += 1
        if isinstance(chunk, TextChunk):
            self._parts.append(chunk.text)
        elif isinstance(chunk, UsageChunk):
            self.usage = chunk


def accumulate_chunks(chunks: Iterable[StreamChunk], into: Optional[StreamResult] = None) -> StreamResult:
    """Fold ``chunks`` into a :class:`StreamResult`.

    Pass ``into`` to keep the partial result when iteration raises: the
    object holds everything consumed before the exception.
    """
    result = into if into is not None else StreamResult()
    for chunk in chunks:
        result.add(chunk)
    return result


__all__ = [
    "StreamResult",
    "accumulate_chunks",
]
