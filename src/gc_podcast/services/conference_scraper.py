"""Conference scraping service.

This module drives a complete scrape of one conference: it fetches the
index page, discovers sessions and talks, enriches them with audio and
speaker details and assembles the resulting ``Conference`` record.
"""

import logging

import backoff

from gc_podcast.infrastructure.api.client import PageFetcher
from gc_podcast.infrastructure.api.content_api import conference_index_url
from gc_podcast.infrastructure.exceptions.fetch_exceptions import (
    FetchConnectionError,
    FetchError,
)
from gc_podcast.infrastructure.parsing.extractors import extract_conference_name
from gc_podcast.models import CONFERENCE_MONTHS, Conference, ScraperConfig
from gc_podcast.services.discovery import extract_sessions_from_index
from gc_podcast.services.enrichment import Enricher

# Configure logger
logger = logging.getLogger(__name__)


class ConferenceScraper:
    """Scrape conferences into structured records.

    Failures while fetching the index page are fatal to a scrape, since
    without it there is nothing to enrich. Failures while enriching single
    sessions or talks only leave those items without audio.
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        fetcher: PageFetcher | None = None,
    ) -> None:
        """Initialize the conference scraper.

        Args:
            config: Scraper configuration (defaults are used if not provided)
            fetcher: Optional page fetcher (built from the config if not provided)
        """
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or PageFetcher.from_settings(
            cache_dir=self.config.cache_dir,
            use_cache=self.config.caching_enabled,
            rate_limit_ms=self.config.rate_limit_ms,
            timeout=self.config.timeout,
        )
        self.enricher = Enricher(self.fetcher, self.config)

    def fetch_index(self, url: str) -> str:
        """Fetch a conference index page, retrying connection failures.

        HTTP status errors are not retried.

        Raises
        ------
            FetchError: If the page cannot be fetched
        """
        fetch_with_retry = backoff.on_exception(
            backoff.expo,
            FetchConnectionError,
            max_tries=max(1, self.config.max_retries),
            jitter=backoff.full_jitter,
        )(self.fetcher.fetch)
        return fetch_with_retry(url)

    def scrape_conference(self, year: int, month: int) -> Conference:
        """Scrape a complete conference.

        Args:
            year: Conference year
            month: Conference month, 4 (April) or 10 (October)

        Returns
        -------
            The assembled conference

        Raises
        ------
            ValueError: If the month is not 4 or 10
            FetchError: If the index page cannot be fetched
        """
        if month not in CONFERENCE_MONTHS:
            raise ValueError(f"Month must be 4 (April) or 10 (October), got {month}")

        lang = self.config.language
        url = conference_index_url(year, month, lang)
        logger.info(f"Scraping conference: {url}")

        try:
            html = self.fetch_index(url)
        except FetchError as e:
            logger.error(f"Failed to fetch conference index {url}: {e}")
            raise

        sessions = extract_sessions_from_index(html, lang)

        if self.config.include_session_audio or self.config.include_talk_audio:
            self.enricher.enrich(sessions)

        conference = Conference(
            year=year,
            month=month,
            name=extract_conference_name(html, year, month),
            url=url,
            language=lang,
            sessions=sessions,
        )

        self._log_summary(conference)
        return conference

    def _log_summary(self, conference: Conference) -> None:
        logger.info(
            f"{conference.name}: {len(conference.sessions)} sessions, "
            f"{conference.talk_count} talks"
        )
        if self.config.include_talk_audio:
            without_audio = [
                talk.title
                for session in conference.sessions
                for talk in session.talks
                if talk.audio is None
            ]
            if without_audio:
                logger.info(f"{len(without_audio)} talks have no audio")
                logger.debug(f"Talks without audio: {', '.join(without_audio)}")


def scrape_conference(
    year: int, month: int, config: ScraperConfig | None = None
) -> Conference:
    """Scrape a conference with a freshly built scraper."""
    return ConferenceScraper(config).scrape_conference(year, month)
