"""
Configuration error raised before any network attempt.

A missing credential is detected at adapter construction; the error is never
retried and never reaches the transport layer.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ConfigurationError(ProviderError):
    """Required adapter configuration is missing or invalid."""

    code: ErrorCode = ErrorCode.CONFIGURATION
    message: str = "configuration error"
    provider: str = "venice"
    retryable: bool = False


__all__ = ["ConfigurationError"]
