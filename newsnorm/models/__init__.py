"""Record types produced by the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SourceVariant(Enum):
    """Known source layouts."""

    # Vietnamese-language edition
    VNEXPRESS = "vnexpress"

    # English edition (e.vnexpress.net)
    VNEXPRESS_EN = "vnexpress-en"

    NYTIMES = "nytimes"

    UNKNOWN = "unknown"

    @property
    def is_supported(self) -> bool:
        return self is not SourceVariant.UNKNOWN


@dataclass
class ArticleRecord:
    """Normalized article fields.

    ``date`` is a display string, not a parsed timestamp. ``tags`` keep
    extraction order and are not deduplicated.
    """

    variant: SourceVariant
    title: str = ""
    author: str = ""
    date: str = ""
    body: str = ""
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.variant.value,
            "title": self.title,
            "author": self.author,
            "date": self.date,
            "content": self.body,
            "tags": list(self.tags),
        }


@dataclass
class LinkCandidate:
    """An article link discovered on a listing page."""

    title: str
    url: str
    summary: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title, "url": self.url}
        if self.summary:
            data["summary"] = self.summary
        return data


@dataclass
class LinkHarvest:
    """Links harvested from one listing page."""

    variant: SourceVariant
    base_url: str
    links: list[LinkCandidate] = field(default_factory=list)

    @property
    def total_found(self) -> int:
        return len(self.links)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.variant.value,
            "baseUrl": self.base_url,
            "links": [link.to_dict() for link in self.links],
            "totalFound": self.total_found,
        }


@dataclass
class StructuredArticle:
    """Candidate field values taken from an embedded NewsArticle block.

    ``supplied`` names the fields the block actually provided.
    """

    title: str = ""
    author: str = ""
    date: str = ""
    body: str = ""
    tags: list[str] = field(default_factory=list)
    supplied: set[str] = field(default_factory=set)

    def has(self, field_name: str) -> bool:
        return field_name in self.supplied
