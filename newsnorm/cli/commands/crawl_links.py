"""CLI command for listing article links found on a section page."""

from __future__ import annotations

import argparse
import json
import sys

from newsnorm.crawler import NewsNormError, harvest_links
from newsnorm.crawler.fetching import NewsFetcher


def add_crawl_links_parser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "crawl-links", help="List article links found on a listing page"
    )
    parser.add_argument("url", type=str, help="Listing/section page URL")
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        default=False,
        help="Print the harvest as JSON",
    )
    parser.set_defaults(func=handle_crawl_links_command)
    return parser


def handle_crawl_links_command(args: argparse.Namespace) -> int:
    try:
        html = NewsFetcher().fetch_page(args.url)
        harvest = harvest_links(html, args.url)
    except NewsNormError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if getattr(args, "as_json", False):
        print(json.dumps(harvest.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print(f"{harvest.total_found} links from {harvest.base_url} ({harvest.variant.value})")
    for index, link in enumerate(harvest.links, start=1):
        print(f"{index:>3}. {link.title}")
        print(f"     {link.url}")
        if link.summary:
            print(f"     {link.summary}")
    return 0
