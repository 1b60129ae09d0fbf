"""CLI command for summarizing an article body."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from newsnorm.crawler import NewsNormError, extract_article
from newsnorm.crawler.fetching import NewsFetcher
from newsnorm.services.text_generation import GroqTextGenerator


def add_summarize_parser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "summarize", help="Summarize an article in Vietnamese"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", type=str, help="Article URL to extract first")
    source.add_argument("--file", type=Path, help="Plain-text file with the body")
    parser.set_defaults(func=handle_summarize_command)
    return parser


def read_body(args: argparse.Namespace) -> str:
    """Return article text from ``--file`` or by extracting ``--url``."""
    if getattr(args, "file", None):
        return Path(args.file).read_text(encoding="utf-8")
    html = NewsFetcher().fetch_page(args.url)
    return extract_article(html, args.url).body


def handle_summarize_command(args: argparse.Namespace) -> int:
    try:
        body = read_body(args)
        summary = GroqTextGenerator().summarize(body)
    except (NewsNormError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(summary)
    return 0
