"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``venice-cli``, keeping the entrypoint thin. This
module has no top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- ``models`` without ``--remote`` and the ``settings`` / ``form`` commands
  never touch the network.
- Errors are printed as JSON to stderr with non-zero return codes:
  ``2`` for usage and configuration problems (including a missing API key),
  ``1`` for request and stream failures.
- ``chat`` writes text deltas to stdout as they arrive and the final usage
  record as JSON to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from ...base.errors import ConfigurationError, ProviderError
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import Message, ModelDescriptor
from ...base.streaming import StreamResult, TextChunk
from ...config import get_provider_config
from ...config.defaults import PROVIDER_NAME
from ...config.env import get_env_var_candidates
from ...venice.client import VeniceProvider
from ...venice.get_venice_models import fetch_models
from ...venice.models import VENICE_MODELS, supports_reasoning
from .settings import (
    build_settings_form,
    load_settings,
    options_for_mode,
    save_settings,
    set_mode_field,
)

_GLOBAL_FIELDS = ("api_key", "base_url")


def _print_stderr(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload), file=sys.stderr)


def mask_key(key: Optional[str]) -> Optional[str]:
    """Return ``****`` plus the last four characters, or ``None``."""
    if not key:
        return None
    return "****" + key[-4:] if len(key) > 8 else "****"


def missing_key_hint() -> Dict[str, Any]:
    """JSON hint listing the environment variables that supply the key."""
    return {
        "error": f"missing API key for provider '{PROVIDER_NAME}'",
        "set_one_of_env": list(get_env_var_candidates(PROVIDER_NAME)),
    }


def _model_rows(models: List[ModelDescriptor]) -> List[Dict[str, Any]]:
    return [m.to_dict() | {"supports_reasoning": supports_reasoning(m.id)} for m in models]


def handle_models(args: argparse.Namespace) -> int:
    """List models from the static table, or the live listing with ``--remote``."""
    if not args.remote:
        print(json.dumps({"models": _model_rows(list(VENICE_MODELS.values()))}))
        return 0
    settings = load_settings()
    cfg = get_provider_config(PROVIDER_NAME, {"api_key": settings.api_key, "base_url": settings.base_url})
    if not cfg.get("api_key"):
        _print_stderr(missing_key_hint())
        return 2
    try:
        models = fetch_models(cfg["api_key"], cfg["base_url"])
    except ProviderError as e:
        _print_stderr({"error": e.message, "code": e.code.value})
        return 1
    print(json.dumps({"models": _model_rows(models)}))
    return 0


def handle_settings(args: argparse.Namespace) -> int:
    """Show settings (key masked) or set one field and persist."""
    settings = load_settings()
    if args.settings_cmd == "set":
        value: Optional[str] = None if args.value.strip().lower() in {"none", "unset", ""} else args.value
        try:
            if args.field in _GLOBAL_FIELDS:
                setattr(settings, args.field, value)
            else:
                set_mode_field(settings, args.mode, args.field, value)
        except ValueError as e:
            _print_stderr({"error": str(e)})
            return 2
        ok, err = save_settings(settings)
        if not ok:
            _print_stderr({"error": f"failed to save settings: {err}"})
            return 1
    data = asdict(settings)
    data["api_key"] = mask_key(settings.api_key)
    print(json.dumps(data))
    return 0


def handle_form(args: argparse.Namespace) -> int:
    """Print the ordered settings form for ``--mode`` as JSON."""
    form = build_settings_form(load_settings(), args.mode)
    for f in form:
        if f.key == "api_key":
            f.value = mask_key(f.value) or ""
    print(json.dumps({"mode": args.mode, "fields": [f.to_dict() for f in form]}))
    return 0


def handle_chat(args: argparse.Namespace) -> int:
    """Stream one prompt through the provider.

    Returns
    -------
    int
        ``0`` on success, ``2`` when no API key is configured, ``1`` when the
        request or the stream fails. Text printed before a mid-stream failure
        is kept; the error JSON reports how much was received.
    """
    opts = options_for_mode(load_settings(), args.mode)
    if args.model:
        opts = opts.model_copy(update={"model_id": args.model})
    try:
        provider = VeniceProvider(opts)
    except ConfigurationError:
        _print_stderr(missing_key_hint())
        return 2

    logger = get_logger(f"cli.{PROVIDER_NAME}")
    model_id, _ = provider.get_model()
    ctx = LogContext(provider=PROVIDER_NAME, model=model_id, mode=args.mode)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1)
    result = StreamResult()
    try:
        with provider.create_message(args.system, [Message(role="user", content=args.prompt)]) as stream:
            for chunk in stream:
                result.add(chunk)
                if isinstance(chunk, TextChunk):
                    sys.stdout.write(chunk.text)
                    sys.stdout.flush()
    except ProviderError as e:
        if result.text:
            sys.stdout.write("\n")
        normalized_log_event(
            logger, "cli.error", ctx, phase="finalize", error_code=e.code.value, emitted=bool(result.text), error=e.message
        )
        _print_stderr({"error": e.message, "code": e.code.value, "partial_chars": len(result.text)})
        return 1
    sys.stdout.write("\n")
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=bool(result.text), tokens=result.usage)
    if result.usage is not None:
        _print_stderr({"usage": result.usage.to_dict()})
    return 0


__all__ = [
    "handle_models",
    "handle_settings",
    "handle_form",
    "handle_chat",
    "mask_key",
    "missing_key_hint",
]
