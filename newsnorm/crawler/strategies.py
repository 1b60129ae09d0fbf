"""Per-source field extraction chains.

Each field of each source layout has an ordered tuple of strategies. A
strategy is a small named callable taking a parsed document and returning a
value (a string, or a list of strings for tags) or ``None``. The chains are
static data; ``first_non_empty`` is the only reducer and it is applied the
same way to every chain.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from newsnorm.metadata.structured_data import format_locale_date
from newsnorm.models import SourceVariant
from newsnorm.utils.document import Document, attr_str, collapse_whitespace

logger = logging.getLogger(__name__)

FieldValue = Union[str, list[str], None]


@dataclass(frozen=True)
class Strategy:
    """A named extraction probe."""

    name: str
    func: Callable[[Document], FieldValue]

    def __call__(self, document: Document) -> FieldValue:
        return self.func(document)


def _is_empty(value: FieldValue) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return len(value) == 0


def first_non_empty(
    chain: Sequence[Strategy], document: Document, field: str = ""
) -> FieldValue:
    """Evaluate ``chain`` in order and return the first non-empty value."""
    for strategy in chain:
        value = strategy(document)
        if _is_empty(value):
            continue
        logger.debug("Field %s resolved by %s", field or "?", strategy.name)
        if isinstance(value, str):
            return value.strip()
        return value
    return None


# ---------------------------------------------------------------------------
# Strategy factories
# ---------------------------------------------------------------------------


def select_text(selector: str) -> Strategy:
    """Text of the first element matching ``selector``."""

    def probe(document: Document) -> str | None:
        element = document.select_one(selector)
        if element is None:
            return None
        return element.get_text().strip()

    return Strategy(f"text:{selector}", probe)


def select_joined(selector: str, separator: str = ", ") -> Strategy:
    """Texts of every match, trimmed and joined."""

    def probe(document: Document) -> str | None:
        texts = [el.get_text().strip() for el in document.select(selector)]
        return separator.join(t for t in texts if t)

    return Strategy(f"joined:{selector}", probe)


def meta_content(*, prop: str | None = None, name: str | None = None) -> Strategy:
    """``content`` of a ``<meta property=...>`` or ``<meta name=...>`` tag."""
    attrs = {"property": prop} if prop else {"name": name}
    label = prop or name

    def probe(document: Document) -> str | None:
        tag = document.find("meta", attrs=attrs)
        if tag is None:
            return None
        return attr_str(tag, "content").strip()

    return Strategy(f"meta:{label}", probe)


def meta_date(*, prop: str | None = None, name: str | None = None) -> Strategy:
    """A machine-readable date meta tag, rendered as a locale date."""
    inner = meta_content(prop=prop, name=name)

    def probe(document: Document) -> str | None:
        value = inner(document)
        if not value:
            return None
        return format_locale_date(value)

    return Strategy(f"meta-date:{prop or name}", probe)


def regex_text(selector: str, pattern: str, flags: int = 0) -> Strategy:
    """First capture group of ``pattern`` searched in the matched text.

    The text of every element matching ``selector`` is concatenated before
    searching.
    """
    compiled = re.compile(pattern, flags)

    def probe(document: Document) -> str | None:
        elements = document.select(selector)
        if not elements:
            return None
        text = "".join(el.get_text() for el in elements)
        match = compiled.search(text)
        if not match:
            return None
        return match.group(1).strip()

    return Strategy(f"regex:{selector}", probe)


def paragraphs(
    *selectors: str, skip_prefixes: tuple[str, ...] = ()
) -> Strategy:
    """Join the paragraphs of the first selector that matches anything.

    Once a selector matches, later selectors are not tried even if every
    matched paragraph turns out empty.
    """

    def probe(document: Document) -> str | None:
        for selector in selectors:
            elements = document.select(selector)
            if not elements:
                continue
            texts = []
            for element in elements:
                text = element.get_text().strip()
                if not text:
                    continue
                if skip_prefixes and text.startswith(skip_prefixes):
                    continue
                texts.append(text)
            logger.debug(
                "Body selector %s matched %d paragraphs", selector, len(elements)
            )
            return "\n\n".join(texts)
        return None

    return Strategy(f"paragraphs:{','.join(selectors)}", probe)


def select_list(selector: str) -> Strategy:
    """Non-empty texts of every match, in document order."""

    def probe(document: Document) -> list[str]:
        texts = [el.get_text().strip() for el in document.select(selector)]
        return [t for t in texts if t]

    return Strategy(f"list:{selector}", probe)


def meta_keywords(name: str = "keywords") -> Strategy:
    """Comma-separated keywords meta tag split into tags."""
    inner = meta_content(name=name)

    def probe(document: Document) -> list[str]:
        value = inner(document) or ""
        return [k.strip() for k in value.split(",") if k.strip()]

    return Strategy(f"meta-keywords:{name}", probe)


def time_datetime(selector: str = "time") -> Strategy:
    """``datetime`` attribute of the first match, else its text.

    A ``datetime`` attribute is machine-readable and is rendered as a locale
    date; visible text is returned as shown.
    """

    def probe(document: Document) -> str | None:
        element = document.select_one(selector)
        if element is None:
            return None
        machine = attr_str(element, "datetime").strip()
        if machine:
            return format_locale_date(machine)
        return collapse_whitespace(element.get_text())

    return Strategy(f"datetime:{selector}", probe)


def document_title() -> Strategy:
    return select_text("title")


# ---------------------------------------------------------------------------
# Chains
# ---------------------------------------------------------------------------

NYT_BODY_SELECTORS = (
    '[data-testid="story-content"] p',
    ".StoryBodyCompanionColumn p",
    ".ArticleBody p",
    'section[name="articleBody"] p',
    ".css-1fanzo5 p",
    ".StoryBodyCompanionColumn div > p",
)

VNEXPRESS_EN_BODY_SELECTORS = (
    ".fck_detail p",
    ".article-content p",
    ".content-detail p",
    ".Normal",
)

# "By <name>" up to the next pipe or the end of the byline.
BYLINE_AUTHOR_PATTERN = r"By\s+(.+?)(?:\s+\||$)"

FieldChains = dict[str, tuple[Strategy, ...]]

VNEXPRESS_CHAINS: FieldChains = {
    "title": (
        select_text(".title_post"),
        select_text(".title-detail"),
        select_text("h1"),
        meta_content(prop="og:title"),
        document_title(),
    ),
    "author": (
        regex_text(".author", r"By\s+(.+?)\s+"),
        meta_content(name="author"),
    ),
    "date": (
        regex_text(".author", r"(\w+\s+\d+,\s+\d+)"),
        select_text(".date"),
        meta_date(prop="article:published_time"),
    ),
    "lead": (
        select_text(".lead_post_detail"),
        select_text("p.description"),
    ),
    "body": (paragraphs(".fck_detail p.Normal"),),
    "tags": (
        select_list(".tag_item a"),
        meta_keywords(),
    ),
}

VNEXPRESS_EN_CHAINS: FieldChains = {
    "title": (
        select_text(".title_news_detail"),
        select_text(".title-detail"),
        select_text("h1"),
        meta_content(prop="og:title"),
    ),
    "author": (
        regex_text(
            ".byline, .author-info, .article-author",
            BYLINE_AUTHOR_PATTERN,
            re.IGNORECASE,
        ),
        meta_content(name="author"),
    ),
    "date": (
        select_text(".date, .article-date, .publish-date, time"),
        time_datetime("time"),
    ),
    "lead": (select_joined(".lead, .summary, .article-summary", separator=""),),
    "body": (paragraphs(*VNEXPRESS_EN_BODY_SELECTORS),),
    "tags": (
        select_list(".tag_item a, .tags a, .article-tags a"),
        meta_keywords(),
    ),
}

NYTIMES_CHAINS: FieldChains = {
    "title": (
        select_text('[data-testid="headline"]'),
        select_text('h1[data-test-id="headline"]'),
        select_text("h1"),
        meta_content(prop="og:title"),
        document_title(),
    ),
    "author": (
        select_joined('[data-testid="byline-author"], [rel="author"]'),
        meta_content(name="author"),
    ),
    "date": (
        time_datetime('time, [data-testid="timestamp"]'),
        meta_date(prop="article:published_time"),
        meta_date(name="pubdate"),
    ),
    "lead": (select_joined('[data-testid="summary"], .summary', separator=""),),
    "body": (
        paragraphs(*NYT_BODY_SELECTORS, skip_prefixes=("Advertisement",)),
        meta_content(name="description"),
        meta_content(prop="og:description"),
    ),
    "tags": (select_list('[data-testid="tags"] a, .tags a'),),
}

FIELD_CHAINS: dict[SourceVariant, FieldChains] = {
    SourceVariant.VNEXPRESS: VNEXPRESS_CHAINS,
    SourceVariant.VNEXPRESS_EN: VNEXPRESS_EN_CHAINS,
    SourceVariant.NYTIMES: NYTIMES_CHAINS,
}

# Metadata-only profile for documents produced by a script-capable renderer,
# where the layout classes are unreliable but head metadata is present.
RENDERED_CHAINS: FieldChains = {
    "title": (
        meta_content(prop="og:title"),
        document_title(),
        select_text("h1"),
    ),
    "author": (meta_content(name="author"),),
    "date": (meta_date(prop="article:published_time"),),
    "lead": (),
    "body": (
        meta_content(prop="og:description"),
        meta_content(name="description"),
    ),
    "tags": (meta_keywords(),),
}


def chains_for(variant: SourceVariant) -> FieldChains:
    """Return the field chains for ``variant``.

    Raises ``KeyError`` for ``SourceVariant.UNKNOWN``.
    """
    return FIELD_CHAINS[variant]
