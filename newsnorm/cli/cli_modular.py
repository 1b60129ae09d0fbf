"""Command-line entry point with lazily loaded command modules."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from newsnorm.config import load_settings

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace], int]

# command name -> module under newsnorm.cli.commands
COMMAND_MODULES: dict[str, str] = {
    "extract-url": "extract_url",
    "crawl-links": "crawl_links",
    "summarize": "summarize",
    "translate": "translate",
}


def create_parser() -> argparse.ArgumentParser:
    """Create minimal parser - commands loaded on-demand in main()."""
    parser = argparse.ArgumentParser(
        prog="newsnorm",
        description="Normalize news articles and harvest article links",
        add_help=False,
    )
    parser.add_argument(
        "--log-level",
        default=load_settings().log_level,
        help="Logging level (e.g. INFO, DEBUG); defaults to LOG_LEVEL",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Command to run (use 'COMMAND --help' for command-specific help)",
    )
    return parser


def _load_command_parser(command: str) -> tuple[Callable, Callable] | None:
    """Load parser and handler for a specific command on-demand.

    Returns: (add_parser_func, handle_command_func) or None if not found
    """
    module_name = COMMAND_MODULES.get(command)
    if not module_name:
        return None

    try:
        module = __import__(
            f"newsnorm.cli.commands.{module_name}",
            fromlist=["*"],
        )
    except ImportError as e:
        logger.warning(f"Failed to load command '{command}': {e}")
        return None

    stem = command.replace("-", "_")
    parser_func = getattr(module, f"add_{stem}_parser", None)
    handler_func = getattr(module, f"handle_{stem}_command", None)
    if parser_func and handler_func:
        return (parser_func, handler_func)
    return None


def main(
    argv: list[str] | None = None,
    *,
    setup_logging_func: Callable[[str], None] | None = None,
    handler_overrides: dict[str, CommandHandler] | None = None,
) -> int:
    """Main CLI entry point with on-demand command loading."""
    parser = create_parser()
    args, remaining = parser.parse_known_args(argv)

    log_level = getattr(args, "log_level", "INFO") or "INFO"
    if setup_logging_func is None:
        from .context import setup_logging as default_setup_logging

        setup_logging_func = default_setup_logging

    setup_logging_func(log_level)

    command = args.command
    if not command:
        print("Available commands:", file=sys.stderr)
        print("  extract-url  - Extract a normalized article from a URL", file=sys.stderr)
        print("  crawl-links  - List article links found on a listing page", file=sys.stderr)
        print("  summarize    - Summarize an article in Vietnamese", file=sys.stderr)
        print("  translate    - Translate an article between vi and en", file=sys.stderr)
        print("Use: newsnorm COMMAND --help for more info", file=sys.stderr)
        return 1

    if handler_overrides and command in handler_overrides:
        handler = handler_overrides[command]
        full_parser = argparse.ArgumentParser()
        full_parser.add_argument("command")
        full_args, _ = full_parser.parse_known_args([command] + remaining)
        return handler(full_args)

    result = _load_command_parser(command)
    if result is None:
        print(f"Unknown command: {command}", file=sys.stderr)
        return 1

    add_parser_func, handle_func = result

    full_parser = argparse.ArgumentParser(
        prog=f"newsnorm {command}",
        description=f"Run {command} command",
    )
    full_parser.add_argument("--log-level", default=log_level)
    subparsers = full_parser.add_subparsers(dest="command")
    add_parser_func(subparsers)

    full_args = full_parser.parse_args([command] + remaining)
    return handle_func(full_args)


if __name__ == "__main__":
    sys.exit(main())
