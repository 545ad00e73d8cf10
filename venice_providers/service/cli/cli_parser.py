"""CLI parser construction for venice-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...config.defaults import VENICE_DEFAULT_MODE, VENICE_MODES


def add_mode_flag(parser: argparse.ArgumentParser) -> None:
    """Attach ``--mode plan|act`` (default ``act``)."""
    parser.add_argument("--mode", choices=VENICE_MODES, default=VENICE_DEFAULT_MODE)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``models``, ``settings``, ``form`` and ``chat``
        subcommands. No I/O happens here.
    """
    p = argparse.ArgumentParser(prog="venice-cli", description="Venice provider CLI")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR (default from VENICE_PROVIDERS_LOG_LEVEL)")
    p.add_argument("--log-file", default=None, help="Also write JSON log lines to this rotating file")
    sub = p.add_subparsers(dest="cmd")

    # models
    p_models = sub.add_parser("models", help="List Venice models (static table by default)")
    p_models.add_argument("--remote", action="store_true", help="Fetch the live listing from GET /models")

    # settings
    p_settings = sub.add_parser("settings", help="Show or edit persisted settings")
    settings_sub = p_settings.add_subparsers(dest="settings_cmd")
    settings_sub.add_parser("show", help="Print settings as JSON (API key masked)")
    p_set = settings_sub.add_parser("set", help="Set one field; pass 'none' to clear it")
    add_mode_flag(p_set)
    p_set.add_argument("field", help="model_id, enable_web_search, or a boolean toggle; api_key/base_url are global")
    p_set.add_argument("value")

    # form
    p_form = sub.add_parser("form", help="Print the settings form for a mode as JSON")
    add_mode_flag(p_form)

    # chat
    p_chat = sub.add_parser("chat", help="Stream a single prompt to stdout")
    add_mode_flag(p_chat)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default="")
    p_chat.add_argument("--model", default=None, help="Override the model selected for the mode")

    return p


__all__ = ["build_parser", "add_mode_flag"]
