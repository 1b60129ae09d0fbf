"""HTTP retrieval of article and listing pages.

The extraction engine never performs I/O; this module is the collaborator
the command line uses to obtain documents before handing them over.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from newsnorm.config import Settings, load_settings

from .errors import FetchError

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


def is_valid_url(url: str | None) -> bool:
    """Check if URL is an absolute http(s) address."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if not parsed.scheme or not parsed.netloc:
        return False
    return parsed.scheme.lower() in ("http", "https")


class NewsFetcher:
    """Fetches pages with a realistic browser identity."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or load_settings()
        self.timeout = self.settings.fetch_timeout
        self.session = session or requests.Session()
        self.session.headers.update(BROWSER_HEADERS)
        self.session.headers.update({"User-Agent": self.settings.user_agent})

    def fetch_page(self, url: str) -> str:
        """Fetch HTML content from a URL.

        Raises:
            FetchError: invalid URL, transport failure or non-2xx status.
        """
        if not is_valid_url(url):
            raise FetchError(url, reason="Invalid URL format")

        logger.debug("Fetching: %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Error fetching %s: %s", url, exc)
            raise FetchError(url, reason=str(exc)) from exc

        if not 200 <= resp.status_code < 300:
            logger.warning("Fetching %s returned HTTP %s", url, resp.status_code)
            raise FetchError(url, status=resp.status_code, reason=resp.reason or "")

        return resp.text
