"""Page fetcher for the conference site.

This module provides a fetcher that retrieves index pages, talk pages and
content API payloads as raw text, consulting an on-disk cache first and
spacing network requests with a rate limiter.
"""

import json
import logging
from pathlib import Path
from typing import Any

import requests

from ..exceptions.fetch_exceptions import (
    FetchConnectionError,
    FetchError,
    HttpStatusError,
    ResponseFormatError,
)
from ..storage.cache import PageCache
from .rate_limiter import RateLimiter

# Configure logger
logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def truncate_url(url: str, max_len: int = 80) -> str:
    """Shorten a URL for log output."""
    if len(url) <= max_len:
        return url
    return url[: max_len - 3] + "..."


class PageFetcher:
    """Rate-limited, cached retrieval of page content.

    Cache hits return immediately without touching the network or the rate
    limiter. Misses wait for the rate limiter, issue the request with
    browser-like headers and store the body in the cache.
    """

    def __init__(
        self,
        cache: PageCache | None = None,
        rate_limiter: RateLimiter | None = None,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the page fetcher.

        Args:
            cache: Optional page cache; None disables caching
            rate_limiter: Optional rate limiter (defaults to 500ms spacing)
            timeout: Request timeout in seconds
            session: Optional requests session to use for HTTP calls
        """
        self.cache = cache
        self.rate_limiter = rate_limiter or RateLimiter(min_delay=0.5)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.request_count = 0

    @classmethod
    def from_settings(
        cls,
        cache_dir: str | Path | None,
        use_cache: bool,
        rate_limit_ms: int,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> "PageFetcher":
        """Build a fetcher from scraper settings.

        Args:
            cache_dir: Cache directory, or None for no cache
            use_cache: Whether to read and write the cache
            rate_limit_ms: Minimum delay between network requests
            timeout: Request timeout in seconds
            session: Optional requests session

        Returns
        -------
            A configured PageFetcher
        """
        cache = PageCache(cache_dir) if use_cache and cache_dir else None
        return cls(
            cache=cache,
            rate_limiter=RateLimiter.from_milliseconds(rate_limit_ms),
            timeout=timeout,
            session=session,
        )

    def fetch(self, url: str) -> str:
        """Fetch the raw content of a URL.

        Args:
            url: Absolute URL to fetch

        Returns
        -------
            The response body as text

        Raises
        ------
            HttpStatusError: If the server returns a non-2xx status
            FetchConnectionError: If the connection fails or times out
            FetchError: For any other request failure
        """
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug(f"[cache] {truncate_url(url)}")
                return cached

        logger.info(f"[fetch] {truncate_url(url)}")
        self.request_count += 1

        try:
            response = self.rate_limiter.execute_with_rate_limit(
                self.session.get, url, timeout=self.timeout
            )
        except requests.exceptions.ConnectionError as e:
            raise FetchConnectionError(f"Failed to connect to {url}: {e}", e) from e
        except requests.exceptions.Timeout as e:
            raise FetchConnectionError(f"Request to {url} timed out: {e}", e) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Error requesting {url}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        # requests assumes ISO-8859-1 for text without a declared charset
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        content = response.text

        if self.cache is not None:
            self.cache.store(url, content)

        return content

    def fetch_json(self, url: str) -> Any:
        """Fetch a URL and decode its body as JSON.

        Args:
            url: Absolute URL to fetch

        Returns
        -------
            The decoded JSON document

        Raises
        ------
            ResponseFormatError: If the body is not valid JSON
            FetchError: If the fetch itself fails
        """
        content = self.fetch(url)
        try:
            return json.loads(content)
        except ValueError as e:
            raise ResponseFormatError(
                f"Failed to parse JSON response from {url}: {e}",
                response_text=content[:500],
            ) from e
