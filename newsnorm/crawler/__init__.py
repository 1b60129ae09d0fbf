"""News article extraction and link discovery."""

from .classifier import classify_source
from .discovery import HarvestProfile, LinkHarvester, harvest_links
from .errors import (
    ExtractionEmptyError,
    FetchError,
    NewsNormError,
    UnsupportedSourceError,
)
from .extraction import extract_article, extract_rendered_article

__all__ = [
    "ExtractionEmptyError",
    "FetchError",
    "HarvestProfile",
    "LinkHarvester",
    "NewsNormError",
    "UnsupportedSourceError",
    "classify_source",
    "extract_article",
    "extract_rendered_article",
    "harvest_links",
]
