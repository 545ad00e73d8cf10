"""
Mid-stream error kinds.

``LineParseError`` marks a single malformed SSE payload; the decoder logs and
skips it. ``TransportInterrupted`` terminates the chunk iterator after the
response has been released.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class LineParseError(ProviderError):
    """A ``data:`` payload could not be decoded into a JSON object.

    Attributes:
        line: The offending payload (truncated by callers before logging).
    """

    code: ErrorCode = ErrorCode.VALIDATION
    message: str = "malformed stream line"
    provider: str = "venice"
    line: str = ""


@dataclass
class TransportInterrupted(ProviderError):
    """Reading the response body failed after streaming had started."""

    code: ErrorCode = ErrorCode.TRANSIENT
    message: str = "stream interrupted"
    provider: str = "venice"


__all__ = ["LineParseError", "TransportInterrupted"]
