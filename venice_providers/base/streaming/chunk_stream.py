"""Closeable iterator returned by streaming calls.

A plain generator only runs its cleanup once iteration has started; a
``ChunkStream`` also releases the transport when the caller closes it before
pulling the first chunk. It is a context manager so callers can scope the
response lifetime with ``with``.
"""
from __future__ import annotations

from typing import Callable, Generator, Iterator, Optional

from .stream_chunks import StreamChunk


class ChunkStream(Iterator[StreamChunk]):
    """Lazy, finite, non-restartable sequence of stream chunks.

    Parameters:
        chunks: Generator producing the chunks; its own ``finally`` blocks
            run when it is closed.
        release: Idempotent callable releasing the underlying transport.
    """

    def __init__(self, chunks: Generator[StreamChunk, None, None], release: Callable[[], None]) -> None:
        self._chunks = chunks
        self._release = release
        self.closed = False

    def __iter__(self) -> "ChunkStream":
        return self

    def __next__(self) -> StreamChunk:
        if self.closed:
            raise StopIteration
        try:
            return next(self._chunks)
        except BaseException:
            # any exit from the generator ends the stream
            self.close()
            raise

    def close(self) -> None:
        """Release the transport, then finish the generator.

        Safe to call from another thread while ``__next__`` is blocked on a
        read: the release makes that read fail, and the running generator
        unwinds in the reading thread instead of being closed here.
        """
        if self.closed:
            return
        self.closed = True
        try:
            self._release()
        finally:
            if not self._chunks.gi_running:
                self._chunks.close()

    def __enter__(self) -> "ChunkStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["ChunkStream"]
