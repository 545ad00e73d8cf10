"""Retry policy for the step that opens a request.

A retry re-issues the whole call; it never resumes a partially consumed
stream, so callers wrap only the open step (see the Venice stream helpers).
Only :class:`ProviderError` values with a retryable code are retried. Every
other exception propagates on the first attempt.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

from ..errors import RETRYABLE_CODES, ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: Optional[float],
        error: Optional[ProviderError],
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Attempt budget and backoff.

    The wait after failed attempt ``n`` (0-based) is ``delay_base ** n``
    seconds, so the defaults wait 1 s then 2 s across three attempts.
    ``attempt_logger`` is called once per attempt. ``delay`` is the wait
    before the next attempt, or ``None`` when no further attempt follows.
    """

    max_attempts: int = 3
    delay_base: float = 2.0
    retryable_codes: tuple[ErrorCode, ...] = RETRYABLE_CODES
    attempt_logger: Optional[AttemptLogger] = None

    def next_delay(self, attempt: int, error: ProviderError) -> Optional[float]:
        """Seconds to wait before retrying after ``error``, or ``None`` to give up."""
        if error.code not in self.retryable_codes or attempt + 1 >= self.max_attempts:
            return None
        return self.delay_base**attempt


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Decorate a zero-or-more argument call with ``config``'s retry policy."""

    def _notify(attempt: int, delay: Optional[float], error: Optional[ProviderError]) -> None:
        if config.attempt_logger is not None:
            config.attempt_logger(attempt=attempt, max_attempts=config.max_attempts, delay=delay, error=error)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            attempt = 0
            while True:
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    delay = config.next_delay(attempt, e)
                    _notify(attempt, delay, e)
                    if delay is None:
                        raise
                    time.sleep(delay)
                    attempt += 1
                    continue
                _notify(attempt, None, None)
                return result

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
