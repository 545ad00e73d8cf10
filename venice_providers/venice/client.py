"""Venice provider adapter (OpenAI-compatible chat completions over HTTP).

Summary:
- Streaming chat via ``httpx`` (pooled client, unbounded stream reads)
- SSE decoding and usage/cost accounting via the shared ``SSEDecoder``
- Retry applied to the stream-open step only

Errors & Observability:
- A missing API key raises ``ConfigurationError`` at construction time
- Request failures raise ``RequestFailed`` / ``EmptyBody`` from
  ``create_message`` before any chunk is produced
- Mid-stream read failures raise ``TransportInterrupted`` from the iterator
- Structured ``stream.start`` / ``stream.end`` / ``stream.error`` events

This module orchestrates I/O only; decoding and request building live in the
base layer and the mixin modules.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Tuple

import httpx

from ..base.errors import ConfigurationError, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Message, ModelDescriptor
from ..base.streaming import ChunkStream
from ..config import get_provider_config
from ..config.defaults import PROVIDER_NAME, VENICE_DEFAULT_BASE_URL, VENICE_DEFAULT_MODEL
from .get_venice_models import fetch_models
from .helpers import VeniceCommonMixin
from .models import resolve_model, resolve_model_override
from .options import VeniceOptions
from .stream_helpers import VeniceStreamingMixin


class VeniceProvider(VeniceCommonMixin, VeniceStreamingMixin):
    """Venice LLM provider implementation.

    Parameters:
        options: Adapter configuration. Explicit keyword arguments below
            override the matching option fields.
        api_key: API key override; otherwise resolved from ``options`` then
            provider config (``VENICE_API_KEY``, config file).
        model: Model id override.
        base_url: API base URL override (defaults to the production endpoint).
        http_client: Optional ``httpx.Client`` to use instead of the shared
            pool (tests, custom transports). Must have ``base_url`` set.

    Raises:
        ConfigurationError: when no API key can be resolved. No network I/O
            happens before this check.
    """

    def __init__(
        self,
        options: Optional[VeniceOptions] = None,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        opts = options or VeniceOptions()
        requested_model = model or opts.model_id or (opts.model_info.id if opts.model_info else None)
        cfg = get_provider_config(
            PROVIDER_NAME,
            {
                "api_key": api_key or opts.api_key,
                "model": requested_model,
                "base_url": base_url or opts.base_url,
            },
        )
        self._logger = get_logger("providers.venice")
        self._api_key: Optional[str] = cfg.get("api_key")
        if not self._api_key:
            raise ConfigurationError(
                message="Venice API key is required",
                provider=PROVIDER_NAME,
                model=cfg.get("model"),
            )
        self._options = opts
        self._model_id: str = cfg.get("model") or VENICE_DEFAULT_MODEL
        self._base_url: str = cfg.get("base_url") or VENICE_DEFAULT_BASE_URL
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        """Canonical provider slug used in logs and config lookups."""
        return PROVIDER_NAME

    def default_model(self) -> str:
        return self._model_id

    def supports_streaming(self) -> bool:
        return True

    def get_model(self) -> Tuple[str, ModelDescriptor]:
        """Resolve the model used for requests.

        A descriptor supplied through ``options.model_info`` wins; otherwise
        the static table is consulted, falling back to the default model.
        """
        if self._options.model_info is not None:
            return resolve_model_override(self._model_id, self._options.model_info)
        return resolve_model(self._model_id)

    def create_message(self, system_prompt: str, messages: List[Message]) -> ChunkStream:
        """Start a streaming chat completion.

        Parameters:
            system_prompt: Sent as the leading system message.
            messages: Conversation in the vendor-agnostic schema.

        Returns:
            A ``ChunkStream`` yielding ``TextChunk`` / ``UsageChunk`` values.
            Close it (or use it as a context manager) to release the
            response early.

        Raises:
            RequestFailed: non-success status or transport failure while
                opening the stream (after retries for retryable codes).
            EmptyBody: success status without a body.
        """
        model_id, model_info = self.get_model()
        ctx = LogContext(provider=self.provider_name, model=model_id, request_id=uuid.uuid4().hex[:12])
        payload = self._build_payload(model_id, self._build_messages(system_prompt, messages))
        headers = self._build_headers()
        self._log_stream_start(ctx, payload)
        try:
            response = self._make_stream_call(payload, headers, model_id, ctx)()
        except ProviderError as e:
            self._log_start_error(ctx, e)
            raise
        return ChunkStream(self._stream_chunks(response, model_info, ctx), release=response.close)

    def list_models(self) -> List[ModelDescriptor]:
        """Fetch the live model list from ``GET {base_url}/models``."""
        return fetch_models(self._api_key, self._base_url)

    def _log_stream_start(self, ctx: LogContext, payload: dict) -> None:
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            base_url=str(self._get_client().base_url),
            message_count=len(payload["messages"]),
            venice_parameters=payload.get("venice_parameters"),
        )

    def _log_start_error(self, ctx: LogContext, e: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="start",
            error_code=e.code.value,
            emitted=False,
            level=logging.ERROR,
            status_code=getattr(e, "status_code", None),
            error=e.message,
        )


__all__ = ["VeniceProvider"]
