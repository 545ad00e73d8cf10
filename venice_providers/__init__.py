"""venice_providers package

Streaming chat adapter for the Venice LLM API (OpenAI-compatible chat
completions with Venice-specific request parameters).

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and the Venice
      subclasses (``ConfigurationError``, ``RequestFailed``, ``EmptyBody``,
      ``TransportInterrupted``)
    - Adapter: :class:`VeniceProvider`, :class:`VeniceOptions`, :func:`create`
    - Messages and chunks: ``Message``, ``ContentPart``, ``TextChunk``,
      ``UsageChunk``, ``accumulate_chunks``

Example::

    from venice_providers import Message, create

    provider = create(model="qwen3-4b")
    with provider.create_message("Be brief.", [Message(role="user", content="hi")]) as stream:
        for chunk in stream:
            ...
"""

from typing import Any, Optional

from .base.errors import (
    ConfigurationError,
    EmptyBody,
    ErrorCode,
    ProviderError,
    RequestFailed,
    TransportInterrupted,
)
from .base.models import ContentPart, Message, ModelDescriptor
from .base.streaming import StreamResult, TextChunk, UsageChunk, accumulate_chunks
from .venice import VeniceOptions, VeniceProvider

__version__ = "0.1.0"


def create(options: Optional[VeniceOptions] = None, **kwargs: Any) -> VeniceProvider:
    """Instantiate a :class:`VeniceProvider`.

    Provider errors (e.g. a missing API key) propagate unchanged; anything
    else raised during construction is wrapped in :class:`ProviderError`.
    """
    try:
        return VeniceProvider(options, **kwargs)
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(code=ErrorCode.UNKNOWN, message=f"Failed to create provider 'venice': {e}", provider="venice") from e


__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "RequestFailed",
    "EmptyBody",
    "TransportInterrupted",
    "Message",
    "ContentPart",
    "ModelDescriptor",
    "TextChunk",
    "UsageChunk",
    "StreamResult",
    "accumulate_chunks",
    "VeniceOptions",
    "VeniceProvider",
    "create",
]
