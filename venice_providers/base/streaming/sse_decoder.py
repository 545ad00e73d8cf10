"""Server-Sent-Events decoder producing text and usage chunks.

The decoder is an explicit state machine fed with raw bytes as they arrive
from the transport:

1. bytes are decoded incrementally (a read may end inside a UTF-8 sequence);
2. decoded text is appended to a buffer and split on ``\\n``; every segment
   but the last is a complete line, the last segment is carried over;
3. lines without the ``data: `` prefix are ignored; ``data: [DONE]`` ends
   decoding; any other payload is parsed as a JSON object;
4. a non-empty ``choices[0].delta.content`` yields a :class:`TextChunk`, a
   ``usage`` object yields a :class:`UsageChunk` (in that order).

A malformed payload raises :class:`LineParseError` internally; the decoder
logs it and moves on to the next line. Whatever remains in the buffer when
the transport ends is discarded.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..constants import (
    LOG_PAYLOAD_PREVIEW_CHARS,
    SSE_DATA_PREFIX,
    SSE_DONE_SENTINEL,
    TOKENS_PER_PRICE_UNIT,
)
from ..errors import LineParseError
from ..logging import LogContext, get_logger, log_event
from ..models import ModelDescriptor
from .stream_chunks import StreamChunk, TextChunk, UsageChunk


def compute_cost(model_info: ModelDescriptor, input_tokens: int, output_tokens: int) -> float:
    """Return the USD cost of a usage record for ``model_info``'s prices."""
    return (
        input_tokens * model_info.input_price / TOKENS_PER_PRICE_UNIT
        + output_tokens * model_info.output_price / TOKENS_PER_PRICE_UNIT
    )


def _as_count(value: Any) -> int:
    """Return a token count as ``int``; absent or non-numeric values count as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def build_usage_chunk(usage: Mapping[str, Any], model_info: ModelDescriptor) -> UsageChunk:
    """Translate an OpenAI-style ``usage`` object into a :class:`UsageChunk`.

    ``cache_read_tokens`` comes from ``prompt_tokens_details.cached_tokens``;
    the vendor does not report cache writes.
    """
    input_tokens = _as_count(usage.get("prompt_tokens"))
    output_tokens = _as_count(usage.get("completion_tokens"))
    details = usage.get("prompt_tokens_details")
    cache_read = _as_count(details.get("cached_tokens")) if isinstance(details, Mapping) else 0
    return UsageChunk(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_read_tokens=cache_read,
        cache_write_tokens=0,
        total_cost=compute_cost(model_info, input_tokens, output_tokens),
    )


def parse_event(payload: str) -> Dict[str, Any]:
    """Parse one ``data:`` payload into a JSON object.

    Raises:
        LineParseError: when the payload is not valid JSON or not an object.
    """
    try:
        event = json.loads(payload)
    except ValueError as e:
        raise LineParseError(message=f"invalid JSON: {e}", line=payload, raw=e) from e
    if not isinstance(event, dict):
        raise LineParseError(message=f"expected JSON object, got {type(event).__name__}", line=payload)
    return event


def delta_content(event: Mapping[str, Any]) -> Optional[str]:
    """Return ``choices[0].delta.content`` when it is a string, else ``None``."""
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    delta = first.get("delta")
    if not isinstance(delta, Mapping):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


class SSEDecoder:
    """Incremental SSE decoder for one response stream.

    Parameters:
        model_info: Descriptor whose prices are used for usage cost.
        logger: Logger receiving ``stream.decode_error`` events; defaults to
            the package streaming logger.
        ctx: Optional log context merged into emitted events.
    """

    def __init__(
        self,
        model_info: ModelDescriptor,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._model_info = model_info
        self._logger = logger or get_logger("streaming")
        self._ctx = ctx
        self._text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.done = False
        self.malformed_lines = 0

    @property
    def pending(self) -> str:
        """Unterminated text carried over to the next read."""
        return self._buffer

    def feed(self, data: bytes) -> List[StreamChunk]:
        """Consume one transport read and return the chunks it completes."""
        if self.done:
            return []
        self._buffer += self._text_decoder.decode(data)
        if "\n" not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split("\n")
        chunks: List[StreamChunk] = []
        for line in lines:
            chunks.extend(self._decode_line(line))
            if self.done:
                break
        return chunks

    def close(self) -> None:
        """Drop any dangling partial line and reset the text decoder."""
        self._buffer = ""
        self._text_decoder.reset()

    def _decode_line(self, line: str) -> List[StreamChunk]:
        if not line.startswith(SSE_DATA_PREFIX):
            return []
        payload = line[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            self.done = True
            self._buffer = ""
            return []
        try:
            event = parse_event(payload)
        except LineParseError as e:
            self.malformed_lines += 1
            log_event(
                self._logger,
                "stream.decode_error",
                self._ctx,
                level=logging.WARNING,
                code=e.code.value,
                error=e.message,
                payload=payload[:LOG_PAYLOAD_PREVIEW_CHARS],
            )
            return []
        chunks: List[StreamChunk] = []
        if text := delta_content(event):
            chunks.append(TextChunk(text=text))
        usage = event.get("usage")
        if isinstance(usage, Mapping):
            chunks.append(build_usage_chunk(usage, self._model_info))
        return chunks


def iter_stream_chunks(
    byte_stream: Iterable[bytes],
    model_info: ModelDescriptor,
    *,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> Iterator[StreamChunk]:
    """Lazily decode ``byte_stream`` into stream chunks.

    Reading stops as soon as the ``[DONE]`` terminator is seen. Exceptions
    raised by ``byte_stream`` propagate unchanged; releasing the underlying
    transport is the owner's job.
    """
    decoder = SSEDecoder(model_info, logger=logger, ctx=ctx)
    try:
        for data in byte_stream:
            yield from decoder.feed(data)
            if decoder.done:
                break
    finally:
        decoder.close()


__all__ = [
    "SSEDecoder",
    "iter_stream_chunks",
    "compute_cost",
    "build_usage_chunk",
    "parse_event",
    "delta_content",
]
