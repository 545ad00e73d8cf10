"""
Request-phase errors raised before any stream chunk is produced.

``RequestFailed`` covers non-success HTTP statuses and transport failures while
opening the stream; ``EmptyBody`` covers a success status without a readable
body. Both are raised from the stream-open step, which is the step the retry
decorator wraps.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class RequestFailed(ProviderError):
    """The chat request did not yield a streamable response.

    Attributes:
        status_code: HTTP status of the response; ``None`` when the transport
            failed before a response arrived.
        body: Response body text (may be empty).
    """

    code: ErrorCode = ErrorCode.UNKNOWN
    message: str = "request failed"
    provider: str = "venice"
    status_code: Optional[int] = None
    body: str = ""

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status_code if self.status_code is not None else "-"
        return f"{self.provider}:{self.model or '-'} {self.code.value} [{status}]: {self.message}"


@dataclass
class EmptyBody(RequestFailed):
    """A success status arrived without a readable response body."""

    code: ErrorCode = ErrorCode.TRANSIENT
    message: str = "response body is empty"
    retryable: bool = True


__all__ = ["RequestFailed", "EmptyBody"]
