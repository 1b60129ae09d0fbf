"""CLI command for extracting one article URL."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from newsnorm.crawler import (
    ExtractionEmptyError,
    NewsNormError,
    extract_article,
    extract_rendered_article,
)
from newsnorm.crawler.fetching import NewsFetcher
from newsnorm.models import ArticleRecord

logger = logging.getLogger(__name__)


def add_extract_url_parser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "extract-url", help="Extract a normalized article from a URL"
    )
    parser.add_argument("url", type=str, help="Article URL")
    parser.add_argument(
        "--rendered-fallback",
        dest="rendered_fallback",
        action="store_true",
        default=False,
        help=(
            "When the page layout yields nothing, retry using only head "
            "metadata (for pages built by JavaScript)"
        ),
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        default=False,
        help="Print the record as JSON",
    )
    parser.set_defaults(func=handle_extract_url_command)
    return parser


def format_record(record: ArticleRecord) -> str:
    lines = [
        f"Source: {record.variant.value}",
        f"Title:  {record.title}",
        f"Author: {record.author}",
        f"Date:   {record.date}",
    ]
    if record.tags:
        lines.append(f"Tags:   {', '.join(record.tags)}")
    lines.append("")
    lines.append(record.body)
    return "\n".join(lines)


def handle_extract_url_command(args: argparse.Namespace) -> int:
    url = args.url
    try:
        html = NewsFetcher().fetch_page(url)
        try:
            record = extract_article(html, url)
        except ExtractionEmptyError:
            if not getattr(args, "rendered_fallback", False):
                raise
            logger.info("Retrying %s with the rendered-page profile", url)
            record = extract_rendered_article(html, url)
    except NewsNormError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if getattr(args, "as_json", False):
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_record(record))
    return 0
