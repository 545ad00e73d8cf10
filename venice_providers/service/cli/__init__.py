"""``venice-cli`` entrypoint: parse arguments, apply logging flags, dispatch."""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import handle_chat, handle_form, handle_models, handle_settings
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run one command; returns the exit code (2 for usage errors and a missing key)."""
    p = build_parser()
    args = p.parse_args(argv)
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)

    if args.cmd == "models":
        return handle_models(args)
    if args.cmd == "settings":
        return handle_settings(args)
    if args.cmd == "form":
        return handle_form(args)
    if args.cmd == "chat":
        return handle_chat(args)
    p.print_help(sys.stderr)
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
