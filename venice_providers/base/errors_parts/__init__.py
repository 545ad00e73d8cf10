"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `venice_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .configuration_error import ConfigurationError
from .request_errors import EmptyBody, RequestFailed
from .stream_errors import LineParseError, TransportInterrupted
from .classification import classify_exception, code_for_status

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
