"""Conference archive service.

This module writes scraped conferences to JSON archive files named
``gc-{year}-{MM}-{lang}.json``, reads them back for the feed renderer and
scrapes ranges of conferences while skipping ones already archived.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path

from tqdm import tqdm

from ..infrastructure.exceptions.fetch_exceptions import FetchError
from ..infrastructure.exceptions.storage_exceptions import StorageError
from ..infrastructure.storage.filesystem import FilesystemStorage
from ..models import (
    CONFERENCE_MONTHS,
    MONTH_NAMES,
    Conference,
    ConferenceOutput,
    ScraperConfig,
)
from .conference_scraper import ConferenceScraper

# Configure logger
logger = logging.getLogger(__name__)

# Earliest conference with audio recordings
FIRST_AUDIO_YEAR = 1971


def output_filename(year: int, month: int, language: str) -> str:
    """Return the archive file name of a conference."""
    return f"gc-{year}-{month:02d}-{language}.json"


def build_output(
    conference: Conference, scraped_at: datetime | None = None
) -> ConferenceOutput:
    """Wrap a conference in the archive envelope."""
    scraped_at = scraped_at or datetime.now(timezone.utc)
    return ConferenceOutput(
        scraped_at=scraped_at.isoformat().replace("+00:00", "Z"),
        conference=conference,
    )


def conference_dates(
    start_year: int, end_year: int, today: date | None = None
) -> list[tuple[int, int]]:
    """List the (year, month) conferences in a range that have taken place.

    A conference counts as held once the 15th of its month has passed.
    """
    today = today or date.today()
    conferences = []
    for year in range(start_year, end_year + 1):
        for month in CONFERENCE_MONTHS:
            if date(year, month, 15) <= today:
                conferences.append((year, month))
    return conferences


@dataclass
class RangeSummary:
    """Outcome counts of a range scrape."""

    scraped: int = 0
    skipped: int = 0
    failed: int = 0


class ArchiveService:
    """Service for saving, loading and bulk-scraping conference archives."""

    def __init__(
        self,
        output_dir: str | Path = "./output",
        scraper: ConferenceScraper | None = None,
        storage: FilesystemStorage | None = None,
    ) -> None:
        """Initialize the archive service.

        Args:
            output_dir: Directory holding the archive files
            scraper: Optional conference scraper (creates a default one if not provided)
            storage: Optional storage backend
        """
        self.output_dir = Path(output_dir)
        self.storage = storage or FilesystemStorage()
        self._scraper = scraper

    @property
    def scraper(self) -> ConferenceScraper:
        if self._scraper is None:
            self._scraper = ConferenceScraper(ScraperConfig())
        return self._scraper

    def path_for(self, year: int, month: int, language: str) -> Path:
        return self.output_dir / output_filename(year, month, language)

    def exists(self, year: int, month: int, language: str) -> bool:
        return self.storage.file_exists(self.path_for(year, month, language))

    def save(self, output: ConferenceOutput) -> Path:
        """Write a conference archive file.

        Returns
        -------
            Path of the written file

        Raises
        ------
            StorageError: If the file cannot be written
        """
        conference = output.conference
        path = self.path_for(conference.year, conference.month, conference.language)
        self.storage.write_json(path, output.to_dict())
        logger.info(f"Saved {path}")
        return path

    def load_conferences(self, language: str = "eng") -> list[ConferenceOutput]:
        """Load every archived conference in a language.

        Conferences without sessions are skipped.

        Raises
        ------
            StorageError: If an archive file cannot be read
        """
        if not self.output_dir.is_dir():
            return []

        outputs = []
        for path in self.storage.list_files(self.output_dir, f"gc-*-{language}.json"):
            data = self.storage.read_json(path)
            if not isinstance(data, dict) or not (data.get("conference") or {}).get(
                "sessions"
            ):
                logger.debug(f"Skipping {path.name}: no sessions")
                continue
            outputs.append(ConferenceOutput.from_dict(data))
        return outputs

    def scrape_and_save(self, year: int, month: int) -> Path:
        """Scrape one conference and write its archive file."""
        conference = self.scraper.scrape_conference(year, month)
        return self.save(build_output(conference))

    def scrape_range(
        self,
        start_year: int,
        end_year: int,
        skip_existing: bool = True,
        today: date | None = None,
        show_progress: bool = False,
    ) -> RangeSummary:
        """Scrape every held conference in a range of years.

        A conference that fails to scrape is logged and counted; the range
        continues with the next one.

        Args:
            start_year: First year to scrape
            end_year: Last year to scrape (inclusive)
            skip_existing: Skip conferences that already have an archive file
            today: Reference date for excluding future conferences
            show_progress: Display a progress bar

        Returns
        -------
            Counts of scraped, skipped and failed conferences
        """
        language = self.scraper.config.language
        conferences = conference_dates(start_year, end_year, today)
        logger.info(f"Found {len(conferences)} conferences to process")

        summary = RangeSummary()
        items = (
            tqdm(conferences, desc="Conferences", unit="conf")
            if show_progress
            else conferences
        )
        for year, month in items:
            filename = output_filename(year, month, language)
            if skip_existing and self.exists(year, month, language):
                logger.info(f"[skip] {filename} (already exists)")
                summary.skipped += 1
                continue

            logger.info(f"[scrape] {year} {MONTH_NAMES[month]}...")
            try:
                self.scrape_and_save(year, month)
                summary.scraped += 1
            except (FetchError, StorageError) as e:
                logger.error(f"[error] Failed {filename}: {e}")
                summary.failed += 1

        logger.info(
            f"Scraped: {summary.scraped}, skipped: {summary.skipped}, "
            f"failed: {summary.failed}"
        )
        return summary
