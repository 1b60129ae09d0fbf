"""
Structured data extraction from embedded JSON-LD blocks.

Publishers describe their articles with schema.org ``NewsArticle`` payloads.
These are more reliable than scraping the page layout, so the extraction
pipeline reads them first and only falls back to markup probes for fields
the payload leaves empty.

Extracts:
- headline -> title
- author(s) -> author
- datePublished -> date (rendered as a locale date string)
- articleBody -> body
- keywords -> tags
"""

import json
import logging
from datetime import datetime
from typing import Any, Iterator

from dateutil import parser as dateparser

from newsnorm.models import StructuredArticle
from newsnorm.utils.document import Document, parse_document

logger = logging.getLogger(__name__)

NEWS_ARTICLE_TYPE = "NewsArticle"


def iter_jsonld_items(document: Document) -> Iterator[dict[str, Any]]:
    """Yield every JSON-LD object in document order.

    Blocks that fail to parse are skipped. A block holding a JSON array
    yields its objects in order.
    """
    soup = parse_document(document)
    for index, script in enumerate(
        soup.find_all("script", attrs={"type": "application/ld+json"})
    ):
        raw = script.string if script.string is not None else script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.debug("Skipping malformed JSON-LD block %d: %s", index, exc)
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if isinstance(item, dict):
                yield item


def is_news_article(item: dict[str, Any]) -> bool:
    item_type = item.get("@type")
    if isinstance(item_type, list):
        return NEWS_ARTICLE_TYPE in item_type
    return item_type == NEWS_ARTICLE_TYPE


def extract_news_article(document: Document) -> StructuredArticle:
    """Project the first NewsArticle block into candidate field values.

    Only the first matching block is read. Later blocks are never consulted
    even when the first one leaves fields empty.
    """
    result = StructuredArticle()

    for item in iter_jsonld_items(document):
        if not is_news_article(item):
            continue

        headline = item.get("headline")
        if isinstance(headline, str) and headline.strip():
            result.title = headline.strip()
            result.supplied.add("title")

        author = extract_author_from_jsonld_field(item.get("author"))
        if author:
            result.author = author
            result.supplied.add("author")

        published = item.get("datePublished")
        if isinstance(published, str) and published.strip():
            result.date = format_locale_date(published)
            result.supplied.add("date")

        body = item.get("articleBody")
        if isinstance(body, str) and body.strip():
            result.body = body
            result.supplied.add("body")

        tags = _keywords_to_tags(item.get("keywords"))
        if tags:
            result.tags = tags
            result.supplied.add("tags")

        break

    return result


def find_article_body(document: Document) -> str:
    """Return the articleBody of the first NewsArticle block that has one."""
    for item in iter_jsonld_items(document):
        if not is_news_article(item):
            continue
        body = item.get("articleBody")
        if isinstance(body, str) and body.strip():
            return body
    return ""


def extract_author_from_jsonld_field(author: Any) -> str:
    """
    Extract author name(s) from a JSON-LD author field.

    Handles various formats:
    - String: "John Smith"
    - Object: {"@type": "Person", "name": "John Smith"}
    - Array: [{"@type": "Person", "name": "John Smith"}, "Jane Doe", ...]

    Multiple names are joined with ", ".
    """
    if isinstance(author, str):
        return author.strip()
    if isinstance(author, dict):
        name = author.get("name")
        if isinstance(name, str):
            return name.strip()
        return ""
    if isinstance(author, list):
        names = []
        for entry in author:
            if isinstance(entry, str) and entry.strip():
                names.append(entry.strip())
            elif isinstance(entry, dict):
                name = entry.get("name")
                if isinstance(name, str) and name.strip():
                    names.append(name.strip())
        return ", ".join(names)
    return ""


def _keywords_to_tags(keywords: Any) -> list[str]:
    if isinstance(keywords, list):
        return [str(k).strip() for k in keywords if str(k).strip()]
    if isinstance(keywords, str):
        return [k.strip() for k in keywords.split(",") if k.strip()]
    return []


def format_locale_date(value: str) -> str:
    """Render an ISO-8601 timestamp as a US-locale date (``M/D/YYYY``).

    The calendar date is taken as written in the timestamp, without
    converting time zones. Values that do not parse, or that lack a year, month
    or day, are returned trimmed.
    """
    text = (value or "").strip()
    if not text:
        return ""
    try:
        parsed = dateparser.isoparse(text)
    except (ValueError, OverflowError):
        parsed = _parse_complete_date(text)
    if parsed is None:
        logger.debug("Could not parse date %r, keeping raw value", text)
        return text
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


# Two different defaults: any component the text leaves out shows up as a
# difference between the two parses.
_PARSE_DEFAULTS = (datetime(1904, 1, 1), datetime(1908, 2, 2))


def _parse_complete_date(text: str) -> datetime | None:
    """Parse free-form text only when it names a year, month and day."""
    try:
        first, second = (
            dateparser.parse(text, default=default) for default in _PARSE_DEFAULTS
        )
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first
