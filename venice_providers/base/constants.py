"""Base shared constants for the Venice adapter.

Central location to avoid scattering magic strings.
"""
from __future__ import annotations

# Server-Sent Events framing
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"

# Prices in the model tables are USD per million tokens
TOKENS_PER_PRICE_UNIT = 1_000_000

# Upper bound on payload text copied into decode-error log events
LOG_PAYLOAD_PREVIEW_CHARS = 200

__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "TOKENS_PER_PRICE_UNIT",
    "LOG_PAYLOAD_PREVIEW_CHARS",
]
