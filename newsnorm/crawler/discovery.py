"""Article link discovery on listing pages.

Each source layout has a ``HarvestProfile``: the anchor selectors that point
at article headlines, the predicate a link must satisfy, and where a short
summary can be found next to the link. ``LinkHarvester`` runs the selectors
in order, resolves and filters each anchor, and keeps the first occurrence
of every URL. Only when the selectors find nothing at all does it retry once
over every anchor on the page; a profile may reject navigation keywords in
that retry only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import Tag

from newsnorm.models import LinkCandidate, LinkHarvest, SourceVariant
from newsnorm.pipeline.url_filters import (
    EXCLUDED_KEYWORDS,
    check_is_article,
    has_excluded_scheme,
)
from newsnorm.utils.document import (
    Document,
    attr_str,
    collapse_whitespace,
    parse_document,
)

from .classifier import classify_source
from .errors import UnsupportedSourceError

logger = logging.getLogger(__name__)

# Titles of this many characters or fewer are dropped.
SHORT_TITLE_LIMIT = 10
MAX_LINKS = 50

_TRAILING_COUNT_RE = re.compile(r"\s*\d+\s*$")


@dataclass(frozen=True)
class HarvestProfile:
    """Link discovery rules for one source layout."""

    variant: SourceVariant
    canonical_base: str
    anchor_selectors: tuple[str, ...]
    domain_token: Optional[str] = None
    required_marker: Optional[str] = ".html"
    excluded_keywords: tuple[str, ...] = ()
    fallback_excluded_keywords: tuple[str, ...] = ()
    extra_predicate: Optional[Callable[[str], bool]] = None
    summary_container: Optional[str] = None
    summary_selector: Optional[str] = None
    summary_first_only: bool = False
    strip_summary_counts: bool = False
    heading_title_fallback: bool = False

    def resolve(self, href: str) -> str:
        """Resolve ``href`` against the canonical site, not the listing host."""
        return urljoin(self.canonical_base.rstrip("/") + "/", href)

    def accepts(self, url: str, title: str, fallback: bool = False) -> bool:
        keywords = (
            self.fallback_excluded_keywords if fallback else self.excluded_keywords
        )
        if not check_is_article(
            url,
            title,
            domain_token=self.domain_token,
            required_marker=self.required_marker,
            excluded_keywords=keywords,
        ):
            return False
        if self.extra_predicate is not None and not self.extra_predicate(url):
            return False
        return True


@dataclass
class _HarvestAccumulator:
    """Seen URLs plus the ordered output of one harvest call."""

    seen: set[str] = field(default_factory=set)
    links: list[LinkCandidate] = field(default_factory=list)

    def add(self, candidate: LinkCandidate) -> bool:
        if candidate.url in self.seen:
            return False
        self.seen.add(candidate.url)
        self.links.append(candidate)
        return True


def _not_homepage(url: str) -> bool:
    return not url.endswith("nytimes.com/")


VNEXPRESS_PROFILE = HarvestProfile(
    variant=SourceVariant.VNEXPRESS,
    canonical_base="https://vnexpress.net",
    anchor_selectors=(
        ".title_news a",
        ".title_news_list a",
        ".item_news_common .title_news a",
        ".item-news .title_news a",
        ".item-news-common .title_news a",
        ".box-subcategory .title_news a",
        "h3.title_news a",
        "h2.title_news a",
        ".item-news h3 a",
        ".list_news .item-news .title_news a",
    ),
    domain_token="vnexpress.net",
    summary_container=".item-news, .item_news_common, .box-subcategory",
    summary_selector=".description, .summary_news, .lead_post_detail",
)

VNEXPRESS_EN_PROFILE = HarvestProfile(
    variant=SourceVariant.VNEXPRESS_EN,
    canonical_base="https://e.vnexpress.net",
    anchor_selectors=(
        ".title_news_site a",
        "h4.title_news_site a",
        ".title_news a",
        "h3.title_news a",
        "h2.title_news a",
        ".item_news .title_news_site a",
        ".item_news h4 a",
        ".item_list_folder .title_news_site a",
        "a[href*='.html']",
    ),
    domain_token="e.vnexpress.net",
    # The all-anchors scan also sees menus and footers.
    fallback_excluded_keywords=EXCLUDED_KEYWORDS,
    summary_container=".item_news, .item_list_folder",
    summary_selector=".lead_news_site a",
    summary_first_only=True,
    strip_summary_counts=True,
)

NYTIMES_PROFILE = HarvestProfile(
    variant=SourceVariant.NYTIMES,
    canonical_base="https://www.nytimes.com",
    anchor_selectors=(
        'a[data-testid="headline-link"]',
        ".css-1l4spti a",
        ".css-8hzhxf a",
        'h3 a[href*="/"]',
        'h2 a[href*="/"]',
        ".story-wrapper a",
        "article a",
        ".promo-wrapper a",
    ),
    domain_token="nytimes.com",
    # Article paths start with the publication year.
    required_marker="/2",
    extra_predicate=_not_homepage,
    summary_container="article, .story-wrapper, .promo-wrapper",
    summary_selector='p, .summary, [data-testid="summary"]',
    summary_first_only=True,
    heading_title_fallback=True,
)

HARVEST_PROFILES: dict[SourceVariant, HarvestProfile] = {
    SourceVariant.VNEXPRESS: VNEXPRESS_PROFILE,
    SourceVariant.VNEXPRESS_EN: VNEXPRESS_EN_PROFILE,
    SourceVariant.NYTIMES: NYTIMES_PROFILE,
}


class LinkHarvester:
    """Collects article links from a listing document for one profile."""

    def __init__(self, profile: HarvestProfile):
        self.profile = profile

    def harvest(self, document: Document | str | bytes) -> list[LinkCandidate]:
        soup = parse_document(document)
        accumulator = _HarvestAccumulator()

        for index, selector in enumerate(self.profile.anchor_selectors, start=1):
            anchors = soup.select(selector)
            logger.debug(
                "Selector %d (%s): found %d elements", index, selector, len(anchors)
            )
            for anchor in anchors:
                self._consider(anchor, accumulator)

        if not accumulator.links:
            logger.info(
                "No %s links found with specific selectors, scanning all anchors",
                self.profile.variant.value,
            )
            for anchor in soup.find_all("a"):
                self._consider(anchor, accumulator, fallback=True)

        links = [
            link
            for link in accumulator.links
            if len(link.title.strip()) > SHORT_TITLE_LIMIT
        ]
        if len(links) > MAX_LINKS:
            logger.debug("Capping %d links to %d", len(links), MAX_LINKS)
        return links[:MAX_LINKS]

    def _consider(
        self, anchor: Tag, accumulator: _HarvestAccumulator, fallback: bool = False
    ) -> None:
        href = attr_str(anchor, "href").strip()
        title = collapse_whitespace(anchor.get_text())
        if not title and self.profile.heading_title_fallback:
            title = self._heading_title(anchor)

        if not href or not title:
            return
        if has_excluded_scheme(href):
            return

        url = self.profile.resolve(href)
        if not self.profile.accepts(url, title, fallback):
            return

        candidate = LinkCandidate(
            title=title, url=url, summary=self._summary(anchor) or None
        )
        if accumulator.add(candidate):
            logger.debug("Found article: %s -> %s", title, url)

    @staticmethod
    def _heading_title(anchor: Tag) -> str:
        heading = anchor.select_one("h1, h2, h3, h4")
        if heading is not None:
            text = collapse_whitespace(heading.get_text())
            if text:
                return text
        container = anchor.css.closest("article, .story-wrapper")
        if container is not None:
            heading = container.select_one("h1, h2, h3, h4")
            if heading is not None:
                return collapse_whitespace(heading.get_text())
        return ""

    def _summary(self, anchor: Tag) -> str:
        profile = self.profile
        if not profile.summary_container or not profile.summary_selector:
            return ""
        container = anchor.css.closest(profile.summary_container)
        if container is None:
            return ""

        if profile.summary_first_only:
            element = container.select_one(profile.summary_selector)
            summary = element.get_text() if element is not None else ""
        else:
            summary = "".join(
                el.get_text() for el in container.select(profile.summary_selector)
            )

        summary = collapse_whitespace(summary)
        if profile.strip_summary_counts and summary:
            # Comment counters trail the lead text on listing pages.
            summary = _TRAILING_COUNT_RE.sub("", summary).strip()
        return summary


def harvest_links(document: Document | str | bytes, url: str) -> LinkHarvest:
    """Harvest article links from a listing page fetched from ``url``.

    Raises ``UnsupportedSourceError`` for pages outside the known sources.
    An empty ``links`` list is a normal outcome, not an error.
    """
    soup = parse_document(document)
    variant = classify_source(url, soup)
    if not variant.is_supported:
        raise UnsupportedSourceError(url)

    links = LinkHarvester(HARVEST_PROFILES[variant]).harvest(soup)
    logger.info("Returning %d unique %s links from %s", len(links), variant.value, url)
    return LinkHarvest(variant=variant, base_url=url, links=links)
