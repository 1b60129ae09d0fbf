"""Article-link predicates used while harvesting listing pages."""

import re

EXCLUDED_SCHEMES = ("javascript:", "mailto:", "tel:")

# Navigation, legal, auth, search and taxonomy pages. Matched as whole
# lowercase words of the URL and the link title, so "tag" rejects
# "/tag/economy" but not "Pentagon".
EXCLUDED_KEYWORDS = (
    "rss",
    "contact",
    "about",
    "policy",
    "terms",
    "subscribe",
    "login",
    "register",
    "search",
    "category",
    "tag",
)

_WORD_RE = re.compile(r"[a-z0-9]+")


def has_excluded_scheme(href):
    href_lower = (href or "").strip().lower()
    return any(scheme in href_lower for scheme in EXCLUDED_SCHEMES)


def _words(text):
    return set(_WORD_RE.findall((text or "").lower()))


def matches_excluded_keyword(url, title, keywords=EXCLUDED_KEYWORDS):
    if not keywords:
        return False
    words = _words(url) | _words(title)
    return any(k in words for k in keywords)


def check_is_article(
    url,
    title="",
    *,
    domain_token=None,
    required_marker=None,
    excluded_keywords=(),
):
    """Conservative article detection for an absolute URL and its link text.

    ``required_marker`` is a substring every article URL carries (for example
    ``".html"``); ``domain_token`` restricts links to one site.
    ``excluded_keywords`` rejects navigation pages by whole-word match.
    """
    if not url:
        return False

    if has_excluded_scheme(url):
        return False

    if required_marker and required_marker not in url:
        return False

    if domain_token and domain_token not in url.lower():
        return False

    if matches_excluded_keyword(url, title, excluded_keywords):
        return False

    return True
