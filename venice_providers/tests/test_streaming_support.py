"""Tests for ChunkStream lifecycle and chunk accumulation."""
from __future__ import annotations

import threading
import time

import pytest

from venice_providers.base.errors import TransportInterrupted
from venice_providers.base.streaming import ChunkStream, StreamResult, TextChunk, UsageChunk, accumulate_chunks


class _Release:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def _gen(items, cleanup):
    try:
        yield from items
    finally:
        cleanup.append("gen-closed")


def test_chunk_stream_releases_once_on_exhaustion():
    release, cleanup = _Release(), []
    stream = ChunkStream(_gen([TextChunk("a"), TextChunk("b")], cleanup), release)
    assert [c.text for c in stream] == ["a", "b"]  # nosec B101
    assert stream.closed and release.calls == 1  # nosec B101
    stream.close()
    assert release.calls == 1  # nosec B101
    assert cleanup == ["gen-closed"]  # nosec B101


def test_chunk_stream_releases_when_generator_raises():
    release = _Release()

    def failing():
        yield TextChunk("a")
        raise RuntimeError("boom")

    stream = ChunkStream(failing(), release)
    assert next(stream) == TextChunk("a")  # nosec B101
    with pytest.raises(RuntimeError):
        next(stream)
    assert release.calls == 1  # nosec B101
    with pytest.raises(StopIteration):
        next(stream)


def test_chunk_stream_context_manager_closes_generator():
    release, cleanup = _Release(), []
    with ChunkStream(_gen([TextChunk("a"), TextChunk("b")], cleanup), release) as stream:
        next(stream)
    assert cleanup == ["gen-closed"] and release.calls == 1  # nosec B101


def test_accumulate_chunks_keeps_last_usage():
    chunks = [
        TextChunk("Hel"),
        UsageChunk(input_tokens=1, output_tokens=1),
        TextChunk("lo"),
        UsageChunk(input_tokens=10, output_tokens=2, total_cost=0.5),
    ]
    result = accumulate_chunks(chunks)
    assert result.text == "Hello"  # nosec B101
    assert result.usage == chunks[-1]  # nosec B101
    assert result.chunks == 4  # nosec B101


def test_accumulate_into_keeps_partial_on_error():
    def broken():
        yield TextChunk("par")
        yield TextChunk("tial")
        raise ValueError("cut")

    result = StreamResult()
    with pytest.raises(ValueError):
        accumulate_chunks(broken(), into=result)
    assert result.text == "partial" and result.usage is None  # nosec B101


def _fold_seconds(n: int) -> float:
    best = float("inf")
    for _ in range(3):
        result = StreamResult()
        chunk = TextChunk("token ")
        start = time.perf_counter()
        for _ in range(n):
            result.add(chunk)
        best = min(best, time.perf_counter() - start)
    assert len(result.text) == 6 * n  # nosec B101
    return best


def test_accumulation_time_grows_linearly():
    small, large = _fold_seconds(20_000), _fold_seconds(80_000)
    assert large < small * 10  # nosec B101


def test_close_from_another_thread_while_next_is_blocked():
    entered, released = threading.Event(), threading.Event()
    release = _Release()

    def blocking():
        yield TextChunk("a")
        entered.set()
        released.wait(5)
        raise TransportInterrupted(message="response closed")

    def do_release():
        release()
        released.set()

    stream = ChunkStream(blocking(), do_release)
    assert next(stream) == TextChunk("a")  # nosec B101
    reader_errors = []

    def reader():
        try:
            next(stream)
        except Exception as e:  # noqa: BLE001 - recorded for the assertion below
            reader_errors.append(e)

    t = threading.Thread(target=reader)
    t.start()
    assert entered.wait(5)  # nosec B101
    stream.close()
    t.join(5)

    assert not t.is_alive()  # nosec B101
    assert release.calls == 1  # nosec B101
    assert len(reader_errors) == 1 and isinstance(reader_errors[0], TransportInterrupted)  # nosec B101
    assert stream.closed  # nosec B101
