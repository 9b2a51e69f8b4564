"""Exceptions raised by the SEO scoring engine."""

from typing import Optional


class SEOScoreError(Exception):
    """Base class for all analysis errors."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(message)


class InvalidUrlError(SEOScoreError):
    """Raised when the input cannot be parsed as an absolute URL.

    Never retried; the analysis does not proceed.
    """


class FetchError(SEOScoreError):
    """Raised when a static fetch fails (network error, timeout, empty error page)."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, url)


class RenderError(SEOScoreError):
    """Raised when the headless browser cannot load or inspect the page."""
