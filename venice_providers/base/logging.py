"""Structured logging for the Venice adapter.

Every package logger is a child of ``venice_providers``. That base logger
owns one stderr handler emitting JSON lines and does not propagate to the
root logger, so an application's logging setup is left alone. The level can
be set with ``VENICE_PROVIDERS_LOG_LEVEL`` or :func:`configure_logger`.

Events are emitted with :func:`log_event` (one JSON object per record) or
:func:`normalized_log_event`, which additionally guarantees the keys in
``REQUIRED_NORMALIZED_KEYS`` so stream lifecycle events share one shape.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional, Union

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "venice_providers"
LOG_LEVEL_ENV = "VENICE_PROVIDERS_LOG_LEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# 10 MiB per file, 5 rotated backups
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


class _ConsoleHandler(logging.StreamHandler):
    """stderr handler that follows ``sys.stderr`` when it is swapped (pytest capture)."""

    def __init__(self) -> None:
        super().__init__()
        self.setFormatter(JsonFormatter())

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


class _ManagedFileHandler(RotatingFileHandler):
    """Rotating file handler installed by :func:`configure_logger`."""


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name (case-insensitive) to its number, else ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _base_logger() -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if not any(isinstance(h, _ConsoleHandler) for h in logger.handlers):
        logger.addHandler(_ConsoleHandler())
        logger.setLevel(_parse_level(os.getenv(LOG_LEVEL_ENV)))
        logger.propagate = False
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return ``name`` as a logger under the ``venice_providers`` namespace."""
    base = _base_logger()
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: Union[int, str, None] = None,
    file_path: Optional[str] = None,
) -> logging.Logger:
    """Adjust the base logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level, numeric or by name. ``None`` keeps the current level.
    file_path: Optional[str]
        Also write JSON lines to this file, rotated at 10 MiB. ``None``
        removes a file handler previously installed here.

    Returns
    -------
    logging.Logger
        The base logger.
    """
    logger = _base_logger()
    if isinstance(level, str):
        logger.setLevel(_parse_level(level, default=logger.level))
    elif level is not None:
        logger.setLevel(level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in [h for h in logger.handlers if isinstance(h, _ManagedFileHandler)]:
        if handler.baseFilename == target:
            return logger
        logger.removeHandler(handler)
        handler.close()
    if target is not None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        handler = _ManagedFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` with ``ctx`` and ``fields`` as one JSON object.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    to_dict = getattr(tokens, "to_dict", None)
    return to_dict() if callable(to_dict) else {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    phase: str,
    attempt: Optional[int] = None,
    error_code: Optional[str] = None,
    emitted: Optional[bool] = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` carrying every key in ``REQUIRED_NORMALIZED_KEYS``.

    Unknown values are written as ``null``. ``tokens`` may be a mapping or an
    object with ``to_dict()`` (such as ``UsageChunk``). ``extra_fields`` never
    replace a normalized key and are dropped when ``None``.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    for key, value in extra_fields.items():
        if value is not None and key not in fields:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
