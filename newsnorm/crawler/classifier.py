"""Decide which known source layout a document belongs to."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from newsnorm.models import SourceVariant
from newsnorm.utils.document import Document, markup_text

logger = logging.getLogger(__name__)

# Most specific first: the English edition is a subdomain of the native site.
ADDRESS_PATTERNS: tuple[tuple[str, SourceVariant], ...] = (
    ("e.vnexpress.net", SourceVariant.VNEXPRESS_EN),
    ("vnexpress.net", SourceVariant.VNEXPRESS),
    ("nytimes.com", SourceVariant.NYTIMES),
)

MARKUP_FINGERPRINTS: tuple[tuple[str, SourceVariant], ...] = (
    ('class="main_fck_detail"', SourceVariant.VNEXPRESS),
    ("nyt-a-", SourceVariant.NYTIMES),
)


def _address_key(url: str) -> str:
    parsed = urlparse(url)
    if parsed.netloc:
        return parsed.netloc.lower()
    # Scheme-less input such as "vnexpress.net/foo"
    return url.lower()


def classify_source(
    url: str | None, html: Document | str | bytes | None = None
) -> SourceVariant:
    """Classify a document by its address, then by markup fingerprint.

    Always returns a value; ``SourceVariant.UNKNOWN`` when nothing matches.
    """
    if url:
        key = _address_key(url)
        for pattern, variant in ADDRESS_PATTERNS:
            if pattern in key:
                return variant

    if html is not None:
        markup = markup_text(html)
        for fingerprint, variant in MARKUP_FINGERPRINTS:
            if fingerprint in markup:
                logger.debug(
                    "Classified %s as %s from markup fingerprint %r",
                    url,
                    variant.value,
                    fingerprint,
                )
                return variant

    return SourceVariant.UNKNOWN
