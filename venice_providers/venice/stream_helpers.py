"""Streaming helpers for the Venice provider.

The stream lifecycle has two phases:

- **open** (``_make_stream_call``): send the request, check the status, and
  return an open ``httpx.Response``. This is the only step wrapped by the
  retry decorator; failures raise ``RequestFailed`` / ``EmptyBody`` before the
  caller receives an iterator.
- **decode** (``_stream_chunks``): feed the response body through the SSE
  decoder. The response is closed on every exit path, including a caller that
  stops iterating early.

Consumers must define ``_logger``, ``_base_url``, ``_http_client`` and
``provider_name``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional

import httpx

from ..base.errors import (
    RETRYABLE_CODES,
    EmptyBody,
    ProviderError,
    RequestFailed,
    TransportInterrupted,
    classify_exception,
    code_for_status,
)
from ..base.http import get_httpx_client
from ..base.logging import LogContext, normalized_log_event
from ..base.models import ModelDescriptor
from ..base.resilience.retry import RetryConfig, retry
from ..base.streaming import StreamChunk, UsageChunk, iter_stream_chunks

# Upper bound on response body text copied into error messages
_ERROR_BODY_PREVIEW = 260


class VeniceStreamingMixin:
    """Mixin providing the open/decode halves of a streaming call."""

    def _get_client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose="venice.stream")

    def _default_retry_config(self, ctx: LogContext) -> RetryConfig:
        """Default policy with an attempt logger bound to ``ctx``."""

        def _log_attempt(*, attempt: int, max_attempts: int, delay: Optional[float], error: Optional[ProviderError]) -> None:
            if error is None or delay is None:
                return
            normalized_log_event(
                self._logger,
                "stream.retry",
                ctx,
                phase="start",
                attempt=attempt,
                error_code=error.code.value,
                emitted=False,
                level=logging.WARNING,
                max_attempts=max_attempts,
                delay=delay,
                error=error.message,
            )

        return RetryConfig(attempt_logger=_log_attempt)

    def _make_stream_call(self, payload: Dict[str, Any], headers: Dict[str, str], model: str, ctx: LogContext) -> Callable[[], httpx.Response]:
        """Return a retry-wrapped zero-argument callable opening the stream."""

        @retry(self._default_retry_config(ctx))
        def _start_stream() -> httpx.Response:
            client = self._get_client()
            request = client.build_request("POST", "/chat/completions", json=payload, headers=headers)
            try:
                response = client.send(request, stream=True)
            except httpx.HTTPError as e:
                code = classify_exception(e)
                raise RequestFailed(
                    code=code,
                    message=str(e) or type(e).__name__,
                    provider=self.provider_name,
                    model=model,
                    retryable=code in RETRYABLE_CODES,
                    raw=e,
                ) from e
            self._check_response(response, model)
            return response

        return _start_stream

    def _check_response(self, response: httpx.Response, model: str) -> None:
        """Raise (after closing the response) unless it carries a streamable body."""
        status = response.status_code
        if not response.is_success:
            try:
                body = response.read().decode("utf-8", errors="replace")
            except httpx.HTTPError:
                body = ""
            finally:
                response.close()
            code = code_for_status(status)
            raise RequestFailed(
                code=code,
                message=f"HTTP {status}: {body[:_ERROR_BODY_PREVIEW]}",
                provider=self.provider_name,
                model=model,
                retryable=code in RETRYABLE_CODES,
                status_code=status,
                body=body,
            )
        if status == 204 or response.headers.get("content-length") == "0":
            response.close()
            raise EmptyBody(provider=self.provider_name, model=model, status_code=status)

    def _iter_body(self, response: httpx.Response, model: str) -> Iterator[bytes]:
        """Yield raw body reads, mapping transport failures to ``TransportInterrupted``."""
        try:
            yield from response.iter_bytes()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TransportInterrupted(
                code=classify_exception(e),
                message=str(e) or type(e).__name__,
                provider=self.provider_name,
                model=model,
                raw=e,
            ) from e

    def _stream_chunks(self, response: httpx.Response, model_info: ModelDescriptor, ctx: LogContext) -> Iterator[StreamChunk]:
        """Decode ``response`` into chunks; always closes it."""
        emitted = 0
        usage: Optional[UsageChunk] = None
        error: Optional[ProviderError] = None
        completed = False
        try:
            for chunk in iter_stream_chunks(
                self._iter_body(response, ctx.model or model_info.id),
                model_info,
                logger=self._logger,
                ctx=ctx,
            ):
                emitted += 1
                if isinstance(chunk, UsageChunk):
                    usage = chunk
                yield chunk
            completed = True
        except TransportInterrupted as e:
            error = e
            raise
        finally:
            response.close()
            self._log_stream_end(ctx, emitted, usage, error, completed)

    def _log_stream_end(
        self,
        ctx: LogContext,
        emitted: int,
        usage: Optional[UsageChunk],
        error: Optional[ProviderError],
        completed: bool,
    ) -> None:
        normalized_log_event(
            self._logger,
            "stream.error" if error else "stream.end",
            ctx,
            phase="finalize",
            error_code=error.code.value if error else None,
            emitted=emitted > 0,
            tokens=usage,
            level=logging.ERROR if error else logging.INFO,
            emitted_count=emitted,
            closed_early=not completed and error is None,
            error=error.message if error else None,
        )


__all__ = ["VeniceStreamingMixin"]
