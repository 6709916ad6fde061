"""Unit tests for the conference archive service."""

import json
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from unittest import mock

from gc_podcast.infrastructure.exceptions.fetch_exceptions import HttpStatusError
from gc_podcast.models import Conference, ScraperConfig, Session, Speaker, Talk
from gc_podcast.services.archive_service import (
    ArchiveService,
    build_output,
    conference_dates,
    output_filename,
)
from gc_podcast.services.conference_scraper import ConferenceScraper


def make_conference(year: int = 2025, month: int = 10, language: str = "eng") -> Conference:
    """Build a small conference record."""
    talk = Talk(
        title="Be Still",
        slug="12stevenson",
        order=1,
        url="https://www.churchofjesuschrist.org/study/general-conference/2025/10/12stevenson?lang=eng",
        speaker=Speaker(name="Gary E. Stevenson"),
    )
    session = Session(
        name="Saturday Morning Session",
        slug="saturday-morning-session",
        order=1,
        url="https://www.churchofjesuschrist.org/study/general-conference/2025/10/saturday-morning-session?lang=eng",
        talks=[talk],
    )
    return Conference(
        year=year,
        month=month,
        name=f"{year} General Conference",
        url=f"https://www.churchofjesuschrist.org/study/general-conference/{year}/{month:02d}?lang={language}",
        language=language,
        sessions=[session],
    )


def make_scraper(language: str = "eng") -> mock.MagicMock:
    """Build a mock conference scraper."""
    scraper = mock.MagicMock(spec=ConferenceScraper)
    scraper.config = ScraperConfig(language=language)
    scraper.scrape_conference.side_effect = lambda year, month: make_conference(
        year, month, language
    )
    return scraper


class TestHelpers:
    """Tests for module-level helpers."""

    def test_output_filename(self) -> None:
        """Test the archive file naming convention."""
        assert output_filename(2025, 4, "eng") == "gc-2025-04-eng.json"
        assert output_filename(1999, 10, "spa") == "gc-1999-10-spa.json"

    def test_build_output(self) -> None:
        """Test the archive envelope."""
        scraped_at = datetime(2025, 10, 6, 12, 30, tzinfo=timezone.utc)

        output = build_output(make_conference(), scraped_at)

        assert output.scraped_at == "2025-10-06T12:30:00Z"
        assert output.version == "1.0"
        assert output.conference.year == 2025

    def test_conference_dates_excludes_future(self) -> None:
        """Test that conferences are listed once their mid-month has passed."""
        assert conference_dates(2024, 2025, today=date(2025, 4, 14)) == [
            (2024, 4),
            (2024, 10),
        ]
        assert conference_dates(2024, 2025, today=date(2025, 4, 15)) == [
            (2024, 4),
            (2024, 10),
            (2025, 4),
        ]

    def test_conference_dates_empty_range(self) -> None:
        """Test a range with the start after the end."""
        assert conference_dates(2025, 2024, today=date(2030, 1, 1)) == []


class TestArchiveService:
    """Tests for the ArchiveService class."""

    def test_save_writes_named_file(self) -> None:
        """Test that saving writes the JSON archive under its conventional name."""
        with tempfile.TemporaryDirectory() as temp_dir:
            service = ArchiveService(output_dir=temp_dir, scraper=make_scraper())

            path = service.save(build_output(make_conference()))

            assert path == Path(temp_dir) / "gc-2025-10-eng.json"
            data = json.loads(path.read_text(encoding="utf-8"))
            assert data["version"] == "1.0"
            assert data["conference"]["sessions"][0]["talks"][0]["speaker"] == {
                "name": "Gary E. Stevenson",
                "role_tag": None,
            }
            assert service.exists(2025, 10, "eng")

    def test_load_conferences(self) -> None:
        """Test loading archives back, skipping empty conferences and other languages."""
        with tempfile.TemporaryDirectory() as temp_dir:
            service = ArchiveService(output_dir=temp_dir, scraper=make_scraper())
            service.save(build_output(make_conference(2024, 4)))
            service.save(build_output(make_conference(2025, 10)))
            service.save(build_output(make_conference(2025, 10, "spa")))

            empty = make_conference(2023, 10)
            empty.sessions = []
            service.save(build_output(empty))

            outputs = service.load_conferences("eng")

            assert [(o.conference.year, o.conference.month) for o in outputs] == [
                (2024, 4),
                (2025, 10),
            ]
            assert outputs[0].conference.sessions[0].talks[0].slug == "12stevenson"

    def test_load_conferences_missing_directory(self) -> None:
        """Test that a missing output directory yields nothing."""
        with tempfile.TemporaryDirectory() as temp_dir:
            service = ArchiveService(output_dir=Path(temp_dir) / "none")

            assert service.load_conferences() == []

    def test_scrape_and_save(self) -> None:
        """Test scraping a single conference into its archive file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            scraper = make_scraper("por")
            service = ArchiveService(output_dir=temp_dir, scraper=scraper)

            path = service.scrape_and_save(2024, 4)

            scraper.scrape_conference.assert_called_once_with(2024, 4)
            assert path.name == "gc-2024-04-por.json"
            assert path.is_file()

    def test_scrape_range_skips_existing(self) -> None:
        """Test that archived conferences are skipped unless forced."""
        with tempfile.TemporaryDirectory() as temp_dir:
            scraper = make_scraper()
            service = ArchiveService(output_dir=temp_dir, scraper=scraper)
            service.save(build_output(make_conference(2024, 4)))

            summary = service.scrape_range(2024, 2024, today=date(2025, 1, 1))

            assert summary.scraped == 1
            assert summary.skipped == 1
            assert summary.failed == 0
            scraper.scrape_conference.assert_called_once_with(2024, 10)

    def test_scrape_range_force(self) -> None:
        """Test that skip_existing=False re-scrapes archived conferences."""
        with tempfile.TemporaryDirectory() as temp_dir:
            scraper = make_scraper()
            service = ArchiveService(output_dir=temp_dir, scraper=scraper)
            service.save(build_output(make_conference(2024, 4)))

            summary = service.scrape_range(
                2024, 2024, skip_existing=False, today=date(2025, 1, 1)
            )

            assert summary.scraped == 2
            assert summary.skipped == 0

    def test_scrape_range_continues_after_failure(self) -> None:
        """Test that a failed conference is counted and the range continues."""
        with tempfile.TemporaryDirectory() as temp_dir:
            scraper = make_scraper()

            def scrape(year: int, month: int) -> Conference:
                if (year, month) == (2024, 4):
                    raise HttpStatusError("HTTP 404: Not Found", status_code=404)
                return make_conference(year, month)

            scraper.scrape_conference.side_effect = scrape
            service = ArchiveService(output_dir=temp_dir, scraper=scraper)

            summary = service.scrape_range(2024, 2024, today=date(2025, 1, 1))

            assert summary.failed == 1
            assert summary.scraped == 1
            assert not service.exists(2024, 4, "eng")
            assert service.exists(2024, 10, "eng")
