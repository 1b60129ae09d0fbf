"""Document helpers shared by the extraction and discovery code."""

from __future__ import annotations

import re
from typing import Union

from bs4 import BeautifulSoup, Tag

Document = Union[BeautifulSoup, Tag]

_WHITESPACE_RE = re.compile(r"\s+")


def parse_document(document: Document | str | bytes) -> Document:
    """Return a parsed document, parsing raw HTML when needed."""
    if isinstance(document, (BeautifulSoup, Tag)):
        return document
    return BeautifulSoup(document, "html.parser")


def collapse_whitespace(text: str | None) -> str:
    """Trim ``text`` and collapse internal whitespace runs to one space."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def attr_str(element: Tag, name: str) -> str:
    """Read an attribute as a string.

    BeautifulSoup returns multi-valued attributes (``class``, ``rel``) as
    lists; those are joined with spaces.
    """
    value = element.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def markup_text(document: Document | str | bytes | None) -> str:
    """Return serialized markup for fingerprint checks."""
    if document is None:
        return ""
    if isinstance(document, bytes):
        return document.decode("utf-8", errors="replace")
    if isinstance(document, str):
        return document
    return str(document)
