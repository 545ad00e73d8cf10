"""Streaming package: chunk types, SSE decoder, closeable stream, accumulation."""

from .stream_chunks import StreamChunk, TextChunk, UsageChunk
from .sse_decoder import SSEDecoder, build_usage_chunk, compute_cost, iter_stream_chunks
from .chunk_stream import ChunkStream
from .streaming import StreamResult, accumulate_chunks

__all__ = [
    "StreamChunk",
    "TextChunk",
    "UsageChunk",
    "SSEDecoder",
    "iter_stream_chunks",
    "compute_cost",
    "build_usage_chunk",
    "ChunkStream",
    "StreamResult",
    "accumulate_chunks",
]
