"""Assemble normalized article records from parsed documents."""

from __future__ import annotations

import logging

from newsnorm.metadata.structured_data import (
    extract_news_article,
    find_article_body,
)
from newsnorm.models import ArticleRecord, SourceVariant, StructuredArticle
from newsnorm.utils.content_cleaner import clean_body
from newsnorm.utils.document import Document, parse_document

from .classifier import classify_source
from .errors import ExtractionEmptyError, UnsupportedSourceError
from .strategies import RENDERED_CHAINS, FieldChains, chains_for, first_non_empty

logger = logging.getLogger(__name__)

# Only this layout mixes paywall and advertising text into its story body.
SANITIZED_VARIANTS = frozenset({SourceVariant.NYTIMES})


def _probe_text(field: str, chains: FieldChains, soup: Document) -> str:
    value = first_non_empty(chains.get(field, ()), soup, field)
    return value if isinstance(value, str) else ""


def _resolve_text(
    field: str, structured: StructuredArticle, chains: FieldChains, soup: Document
) -> str:
    if structured.has(field):
        return getattr(structured, field)
    return _probe_text(field, chains, soup)


def _resolve_tags(
    structured: StructuredArticle, chains: FieldChains, soup: Document
) -> list[str]:
    if structured.has("tags"):
        return list(structured.tags)
    value = first_non_empty(chains.get("tags", ()), soup, "tags")
    return list(value) if isinstance(value, list) else []


def _resolve_body(
    structured: StructuredArticle,
    chains: FieldChains,
    soup: Document,
    sanitize: bool,
) -> str:
    if structured.has("body"):
        return structured.body

    raw = _probe_text("body", chains, soup)
    lead = _probe_text("lead", chains, soup)

    if sanitize:
        return clean_body(raw, fallback_body=find_article_body(soup), lead=lead)
    if lead and raw:
        return f"{lead}\n\n{raw}"
    return lead or raw


def assemble_record(
    soup: Document,
    variant: SourceVariant,
    chains: FieldChains,
    sanitize: bool = False,
) -> ArticleRecord:
    """Fill every field from structured data first, then from ``chains``.

    Fields are independent: structured data may supply the title while the
    author comes from a markup probe.
    """
    structured = extract_news_article(soup)
    if structured.supplied:
        logger.debug(
            "Structured data supplied %s", ", ".join(sorted(structured.supplied))
        )

    return ArticleRecord(
        variant=variant,
        title=_resolve_text("title", structured, chains, soup),
        author=_resolve_text("author", structured, chains, soup),
        date=_resolve_text("date", structured, chains, soup),
        body=_resolve_body(structured, chains, soup, sanitize),
        tags=_resolve_tags(structured, chains, soup),
    )


def validate_record(record: ArticleRecord, url: str | None = None) -> ArticleRecord:
    """Reject records that have neither a title nor a body."""
    if not record.title.strip() and not record.body.strip():
        logger.warning("No title or body extracted from %s", url)
        raise ExtractionEmptyError(url)
    return record


def _classify_or_raise(soup: Document, url: str) -> SourceVariant:
    variant = classify_source(url, soup)
    if not variant.is_supported:
        logger.info("Rejecting unsupported source %s", url)
        raise UnsupportedSourceError(url)
    return variant


def extract_article(document: Document | str | bytes, url: str) -> ArticleRecord:
    """Extract a normalized article from a document fetched from ``url``.

    Raises:
        UnsupportedSourceError: the document is not from a known source.
        ExtractionEmptyError: neither a title nor a body could be found.
    """
    soup = parse_document(document)
    variant = _classify_or_raise(soup, url)

    record = assemble_record(
        soup,
        variant,
        chains_for(variant),
        sanitize=variant in SANITIZED_VARIANTS,
    )
    logger.info(
        "Extracted %s article from %s (title=%d chars, body=%d chars, tags=%d)",
        variant.value,
        url,
        len(record.title),
        len(record.body),
        len(record.tags),
    )
    return validate_record(record, url)


def extract_rendered_article(
    document: Document | str | bytes, url: str
) -> ArticleRecord:
    """Extract from a script-rendered document using head metadata only.

    Meant as the retry path when ``extract_article`` raised
    ``ExtractionEmptyError`` for a page that builds its layout in the browser.
    """
    soup = parse_document(document)
    variant = _classify_or_raise(soup, url)
    record = assemble_record(soup, variant, RENDERED_CHAINS)
    return validate_record(record, url)
