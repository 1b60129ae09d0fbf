"""Tests for the page fetcher."""

import pytest
import requests

from newsnorm.config import Settings
from newsnorm.crawler.errors import FetchError
from newsnorm.crawler.fetching import NewsFetcher, is_valid_url


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://vnexpress.net/x.html", True),
        ("http://www.nytimes.com/", True),
        ("ftp://example.com/file", False),
        ("vnexpress.net/x.html", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_url(url, expected):
    assert is_valid_url(url) is expected


class TestNewsFetcher:
    def test_returns_page_text_and_sets_identity(self):
        session = FakeSession(FakeResponse(text="<html>ok</html>"))
        settings = Settings(user_agent="TestAgent/1.0", fetch_timeout=5.0)

        fetcher = NewsFetcher(settings=settings, session=session)
        html = fetcher.fetch_page("https://vnexpress.net/x.html")

        assert html == "<html>ok</html>"
        assert session.calls == [("https://vnexpress.net/x.html", 5.0)]
        assert session.headers["User-Agent"] == "TestAgent/1.0"
        assert "text/html" in session.headers["Accept"]

    def test_invalid_url_is_rejected_before_any_request(self):
        session = FakeSession(FakeResponse())
        fetcher = NewsFetcher(settings=Settings(), session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_page("not a url")

        assert "Invalid URL format" in str(exc_info.value)
        assert session.calls == []

    def test_http_error_status(self):
        session = FakeSession(FakeResponse(status_code=403, reason="Forbidden"))
        fetcher = NewsFetcher(settings=Settings(), session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_page("https://www.nytimes.com/2024/01/01/x.html")

        assert exc_info.value.status == 403
        assert "403 Forbidden" in str(exc_info.value)

    def test_transport_error(self):
        session = FakeSession(exc=requests.ConnectionError("connection refused"))
        fetcher = NewsFetcher(settings=Settings(), session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch_page("https://vnexpress.net/x.html")

        assert exc_info.value.status is None
        assert "connection refused" in str(exc_info.value)
