"""Unified provider error taxonomy public surface.

This module re-exports the one-concern-per-file implementations under
``venice_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    RETRYABLE_CODES,
    ConfigurationError,
    EmptyBody,
    ErrorCode,
    LineParseError,
    ProviderError,
    RequestFailed,
    TransportInterrupted,
    classify_exception,
    code_for_status,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "ConfigurationError",
    "RequestFailed",
    "EmptyBody",
    "LineParseError",
    "TransportInterrupted",
    "classify_exception",
    "code_for_status",
]
