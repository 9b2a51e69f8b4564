"""Static fetcher: retrieves raw page markup over HTTP."""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from seoscore.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from seoscore.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    """Raw markup and response details from a single GET."""

    url: str
    html: str
    status_code: int
    final_url: Optional[str] = None
    elapsed_ms: int = 0
    headers: Dict[str, str] = field(default_factory=dict)


class WebCrawler:
    """Fetches a single page for static analysis.

    One request per call, no retries: a failure is reported to the caller,
    which falls back to a degraded result.
    """

    def __init__(self, user_agent: Optional[str] = None, session: Optional[requests.Session] = None):
        """Initialize the web crawler.

        Args:
            user_agent: Custom user agent string for requests
            session: Pre-built requests session (a new one is created if None)
        """
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.session = session or requests.Session()

        self.session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        })

    def fetch(self, url: str, timeout: int = DEFAULT_FETCH_TIMEOUT_SECONDS) -> FetchedPage:
        """Fetch a URL and return its markup.

        Args:
            url: Absolute URL to fetch
            timeout: Request timeout in seconds

        Returns:
            FetchedPage with the response body and status

        Raises:
            FetchError: On timeout, connection failure, or an error status without a body
        """
        logger.info(f"Fetching: {url}")
        start_time = time.monotonic()

        try:
            response = self.session.get(url, timeout=timeout, allow_redirects=True)
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Request timeout after {timeout}s", url=url) from e
        except requests.exceptions.ConnectionError as e:
            raise FetchError(f"Connection error: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {e}", url=url) from e

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        html = response.text or ""

        if not response.ok and not html.strip():
            raise FetchError(
                f"Failed to fetch URL ({response.status_code})",
                url=url,
                status_code=response.status_code,
            )

        logger.info(f"Fetch complete: {url} (status={response.status_code}, time={elapsed_ms}ms)")

        return FetchedPage(
            url=url,
            html=html,
            status_code=response.status_code,
            final_url=response.url,
            elapsed_ms=elapsed_ms,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
