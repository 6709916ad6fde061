"""Enrichment of discovered sessions and talks with audio and speaker data.

Each session or talk page is resolved through a small state machine:

    not fetched -> content API attempted -> done
                                         -> HTML fallback attempted -> done
                                                                    -> failed

The structured content API is tried first. When the page URL has no API
counterpart, or the API fetch or payload fails, the rendered page is fetched
and scanned with broader patterns. The result of every attempt is returned
as a ``PageData`` record tagged with the path that produced it, so callers
branch on the outcome instead of on exceptions.
"""

import logging
from dataclasses import dataclass

from tqdm import tqdm

from gc_podcast.infrastructure.api.client import PageFetcher
from gc_podcast.infrastructure.api.content_api import construct_bio_url, to_api_url
from gc_podcast.infrastructure.exceptions.fetch_exceptions import FetchError
from gc_podcast.infrastructure.parsing.extractors import (
    extract_audio_from_api,
    extract_audio_from_html,
    extract_speaker_from_api,
    extract_speaker_from_html,
)
from gc_podcast.models import (
    DEFAULT_SPEAKER_NAME,
    AudioAsset,
    ScraperConfig,
    Session,
    Speaker,
    Talk,
)

# Configure logger
logger = logging.getLogger(__name__)


class EnrichmentOutcome:
    """Constants for the path that resolved a page."""

    API = "api"
    HTML_FALLBACK = "html_fallback"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PageData:
    """Audio and speaker data recovered from one page."""

    outcome: str
    audio: AudioAsset | None = None
    speaker: Speaker | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome in (EnrichmentOutcome.API, EnrichmentOutcome.HTML_FALLBACK)


@dataclass
class EnrichmentStats:
    """Counts of how pages were resolved during one enrichment pass."""

    api: int = 0
    html_fallback: int = 0
    failed: int = 0
    skipped: int = 0
    missing_audio: int = 0

    def record(self, page_data: PageData) -> None:
        if page_data.outcome == EnrichmentOutcome.API:
            self.api += 1
        elif page_data.outcome == EnrichmentOutcome.HTML_FALLBACK:
            self.html_fallback += 1
        elif page_data.outcome == EnrichmentOutcome.FAILED:
            self.failed += 1
        else:
            self.skipped += 1

        if page_data.succeeded and page_data.audio is None:
            self.missing_audio += 1


class Enricher:
    """Fetch per-item pages and attach audio and speaker details."""

    def __init__(self, fetcher: PageFetcher, config: ScraperConfig) -> None:
        """Initialize the enricher.

        Args:
            fetcher: Fetcher used for API and page requests
            config: Scraper configuration (language and audio flags)
        """
        self.fetcher = fetcher
        self.config = config
        self.stats = EnrichmentStats()

    def _from_api(self, api_url: str) -> PageData:
        try:
            payload = self.fetcher.fetch_json(api_url)
            return PageData(
                outcome=EnrichmentOutcome.API,
                audio=extract_audio_from_api(payload, self.config.language),
                speaker=extract_speaker_from_api(payload, self.config.language),
            )
        except FetchError as e:
            return PageData(outcome=EnrichmentOutcome.FAILED, error=str(e))

    def _from_html(self, url: str) -> PageData:
        try:
            html = self.fetcher.fetch(url)
        except FetchError as e:
            return PageData(outcome=EnrichmentOutcome.FAILED, error=str(e))

        return PageData(
            outcome=EnrichmentOutcome.HTML_FALLBACK,
            audio=extract_audio_from_html(html, self.config.language),
            speaker=extract_speaker_from_html(html, self.config.language),
        )

    def extract_page_data(self, url: str) -> PageData:
        """Resolve audio and speaker data for a session or talk page.

        Args:
            url: Absolute page URL

        Returns
        -------
            The page data, tagged with the path that produced it
        """
        if not url:
            return PageData(outcome=EnrichmentOutcome.SKIPPED)

        api_url = to_api_url(url, self.config.language)
        if api_url is not None:
            result = self._from_api(api_url)
            if result.succeeded:
                return result
            logger.warning(
                f"API failed for {url} ({result.error}), falling back to HTML scraping"
            )

        result = self._from_html(url)
        if not result.succeeded:
            logger.warning(f"HTML fallback failed for {url}: {result.error}")
        return result

    def enrich_session(self, session: Session) -> PageData:
        """Attach full-session audio to a session."""
        page_data = self.extract_page_data(session.url)
        self.stats.record(page_data)

        if page_data.audio is not None:
            session.audio = page_data.audio
            session.duration_ms = page_data.audio.duration_ms
        elif page_data.outcome == EnrichmentOutcome.FAILED:
            logger.warning(f"Failed to fetch session audio for {session.name}")
        return page_data

    def enrich_talk(self, talk: Talk) -> PageData:
        """Attach audio and speaker details to a talk."""
        page_data = self.extract_page_data(talk.url)
        self.stats.record(page_data)

        if page_data.audio is not None:
            talk.audio = page_data.audio
            talk.duration_ms = page_data.audio.duration_ms
        if page_data.speaker is not None:
            # Keep the name found on the index when the page names no one
            if (
                page_data.speaker.name == DEFAULT_SPEAKER_NAME
                and talk.speaker.name != DEFAULT_SPEAKER_NAME
            ):
                page_data.speaker.name = talk.speaker.name
                page_data.speaker.bio_url = construct_bio_url(
                    talk.speaker.name, self.config.language
                )
            talk.speaker = page_data.speaker
        if page_data.outcome == EnrichmentOutcome.FAILED:
            logger.warning(f"Failed to fetch talk details for {talk.title}")
        return page_data

    def enrich(self, sessions: list[Session]) -> EnrichmentStats:
        """Enrich sessions and their talks in order, one request at a time.

        A page that cannot be resolved leaves its item as discovered; it never
        aborts the pass.

        Args:
            sessions: Sessions produced by discovery, modified in place

        Returns
        -------
            Counts of how the pages were resolved
        """
        self.stats = EnrichmentStats()

        work: list[Session | Talk] = []
        for session in sessions:
            if self.config.include_session_audio and session.url:
                work.append(session)
            if self.config.include_talk_audio:
                work.extend(talk for talk in session.talks if talk.url)

        items = (
            tqdm(work, desc="Enriching", unit="page") if self.config.show_progress else work
        )
        for item in items:
            if isinstance(item, Session):
                self.enrich_session(item)
            else:
                self.enrich_talk(item)

        logger.info(
            f"Enrichment finished: {self.stats.api} via API, "
            f"{self.stats.html_fallback} via HTML, {self.stats.failed} failed, "
            f"{self.stats.missing_audio} without audio"
        )
        return self.stats
