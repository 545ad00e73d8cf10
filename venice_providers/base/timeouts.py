"""Timeout values for the Venice adapter's HTTP calls.

Stream reads have no read timeout. A caller that needs a deadline closes the
chunk iterator (or the client), which releases the response.

Supported environment variables (all optional, positive floats):
    VENICE_TIMEOUT_CONNECT_SECONDS
    VENICE_TIMEOUT_HTTP_SECONDS

The parsed configuration is cached; the cache refreshes when the variables
change so tests can adjust values with ``monkeypatch``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Bound on establishing the TCP/TLS connection
            and on writing the request.
        http_timeout_seconds: Overall bound for non-streaming requests such as
            the model listing.
    """

    connect_timeout_seconds: float = 30.0
    http_timeout_seconds: float = 30.0

    def stream_timeout(self) -> httpx.Timeout:
        """Return an ``httpx.Timeout`` with connect/write/pool bounds and no read bound."""
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=None,
            write=self.connect_timeout_seconds,
            pool=self.connect_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float; fall back to ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in ("VENICE_TIMEOUT_CONNECT_SECONDS", "VENICE_TIMEOUT_HTTP_SECONDS"))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("VENICE_TIMEOUT_CONNECT_SECONDS", 30.0),
        http_timeout_seconds=_parse_env_float("VENICE_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
