"""Context fields shared by the events of one request."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    """Identify the provider call an event belongs to.

    ``mode`` is the settings mode (``plan`` / ``act``) when the call was made
    from the CLI. ``extra`` carries caller-specific keys; ``None`` values are
    left out of :meth:`to_dict`.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    mode: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "mode": self.mode,
            "request_id": self.request_id,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
