"""Network access for the conference scraper.

This package provides the rate-limited, cached page fetcher and the URL
mapping between study pages and the structured content API.
"""

from gc_podcast.infrastructure.api.client import PageFetcher
from gc_podcast.infrastructure.api.content_api import (
    API_BASE,
    BASE_URL,
    conference_index_url,
    to_api_url,
)
from gc_podcast.infrastructure.api.rate_limiter import RateLimiter

__all__ = [
    "API_BASE",
    "BASE_URL",
    "PageFetcher",
    "RateLimiter",
    "conference_index_url",
    "to_api_url",
]
