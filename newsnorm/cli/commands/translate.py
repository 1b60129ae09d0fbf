"""CLI command for translating an article body between Vietnamese and English."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from newsnorm.crawler import NewsNormError
from newsnorm.services.text_generation import GroqTextGenerator

from .summarize import read_body


def add_translate_parser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "translate", help="Translate an article between vi and en"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", type=str, help="Article URL to extract first")
    source.add_argument("--file", type=Path, help="Plain-text file with the body")
    parser.add_argument(
        "--source", dest="source_language", choices=["vi", "en"], required=True
    )
    parser.add_argument(
        "--target", dest="target_language", choices=["vi", "en"], required=True
    )
    parser.set_defaults(func=handle_translate_command)
    return parser


def handle_translate_command(args: argparse.Namespace) -> int:
    try:
        body = read_body(args)
        translation = GroqTextGenerator().translate(
            body, args.source_language, args.target_language
        )
    except (NewsNormError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(translation)
    return 0
