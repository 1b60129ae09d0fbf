"""Exceptions raised by the extraction engine and its collaborators."""


class NewsNormError(Exception):
    """Base class for newsnorm errors."""


class UnsupportedSourceError(NewsNormError):
    """Raised when a document does not belong to a known source layout."""

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__(
            "Unsupported news source. Only VNExpress (VN/EN) and "
            "New York Times are supported."
        )


class ExtractionEmptyError(NewsNormError):
    """Raised when neither a title nor a body could be extracted.

    Usually a page that renders its content with JavaScript or sits fully
    behind a paywall.
    """

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__(
            "Could not extract article content. The page might be behind a "
            "paywall or use dynamic loading."
        )


class FetchError(NewsNormError):
    """Raised when a page could not be retrieved."""

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"{status} {reason}".strip() if status else reason
        super().__init__(f"Failed to fetch {url}: {detail}")
