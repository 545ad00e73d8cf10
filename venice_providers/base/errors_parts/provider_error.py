"""Root exception for every failure surfaced by the adapter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """An adapter failure carrying a normalized :class:`ErrorCode`.

    ``retryable`` describes the error for callers; the retry policy itself
    decides from ``code``. ``raw`` keeps the underlying client exception when
    there is one.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
