"""
Mapping of HTTP statuses and client exceptions onto :class:`ErrorCode`.

Both HTTP stacks used by the package are understood: ``httpx`` (chat
streaming) and ``requests`` (model listing).
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple, Type

import httpx
import requests

from .error_code import ErrorCode
from .provider_error import ProviderError

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    402: ErrorCode.AUTH,  # Venice: insufficient balance
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    415: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_TIMEOUT_TYPES: Tuple[Type[BaseException], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    httpx.TimeoutException,
    requests.Timeout,
)

# Connection-level failures with no HTTP status
_TRANSPORT_TYPES: Tuple[Type[BaseException], ...] = (
    httpx.TransportError,
    requests.ConnectionError,
)

# First match wins; rate limits need both words and are checked separately
_MESSAGE_PATTERNS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("auth", "api key", "unauthorized", "forbidden")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.CONFLICT, ("conflict", "already exists")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "temporarily down")),
    (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def code_for_status(status: int) -> ErrorCode:
    """Code for an HTTP status; unmapped 5xx are server errors, the rest unknown."""
    code = _HTTP_STATUS_MAP.get(status)
    if code is not None:
        return code
    return ErrorCode.SERVER_ERROR if 500 <= status < 600 else ErrorCode.UNKNOWN


def _extract_status(exc: BaseException) -> Optional[int]:
    """HTTP status from ``status_code``, ``status`` or ``response.status_code``."""
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for value in candidates:
        if isinstance(value, int) and 100 <= value < 600:
            return value
    return None


def _code_from_message(msg: str) -> Optional[ErrorCode]:
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, needles in _MESSAGE_PATTERNS:
        if any(n in msg for n in needles):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify ``exc``.

    Checked in order: an existing ``ProviderError`` code, timeout types, an
    HTTP status carried by the exception, connection failures (transient),
    then keywords in the message. Anything else is ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, _TIMEOUT_TYPES):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return code_for_status(status)
    if isinstance(exc, _TRANSPORT_TYPES):
        return ErrorCode.TRANSIENT
    return _code_from_message(str(exc).lower()) or ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "code_for_status",
]
