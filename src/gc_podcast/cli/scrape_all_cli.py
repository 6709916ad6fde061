"""Command-line interface for scraping a range of conferences.

Useful for initial setup and periodic updates: every April and October
conference in the range that has already taken place is scraped, skipping
conferences whose archive file already exists unless --force is given.
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path

from gc_podcast.cli.scrape_cli import setup_logging
from gc_podcast.infrastructure.exceptions.storage_exceptions import StorageError
from gc_podcast.models import SUPPORTED_LANGUAGES, ScraperConfig
from gc_podcast.services.archive_service import FIRST_AUDIO_YEAR, ArchiveService
from gc_podcast.services.conference_scraper import ConferenceScraper


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
        Parsed arguments
    """
    current_year = datetime.date.today().year

    parser = argparse.ArgumentParser(
        description="Scrape all General Conferences in a range of years"
    )

    parser.add_argument(
        "-s",
        "--start",
        type=int,
        default=current_year - 5,
        help="Start year (default: 5 years ago)",
    )

    parser.add_argument(
        "-e",
        "--end",
        type=int,
        default=current_year,
        help="End year (default: current year)",
    )

    parser.add_argument(
        "-l",
        "--lang",
        choices=SUPPORTED_LANGUAGES,
        default="eng",
        help="Language (default: eng)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="./output",
        help="Output directory (default: ./output)",
    )

    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Re-scrape even if the archive file exists",
    )

    range_group = parser.add_mutually_exclusive_group()
    range_group.add_argument(
        "--all",
        action="store_true",
        help=f"Scrape all conferences with audio (from {FIRST_AUDIO_YEAR})",
    )
    range_group.add_argument(
        "--recent",
        action="store_true",
        help="Scrape the last 2 years only",
    )

    parser.add_argument(
        "--cache-dir",
        type=str,
        default=".cache",
        help="Directory where fetched pages are cached (default: .cache)",
    )

    parser.add_argument(
        "--rate-limit-ms",
        type=int,
        default=500,
        help="Minimum delay between network requests in milliseconds (default: 500)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.all:
        args.start = FIRST_AUDIO_YEAR
    elif args.recent:
        args.start = current_year - 2

    return args


def main(argv: list[str] | None = None) -> int:
    """Run the range scraper."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    logger.info("=== Scrape All Conferences ===")
    logger.info(f"Years: {args.start} - {args.end}")
    logger.info(f"Language: {args.lang}")
    logger.info(f"Output: {args.output}")
    logger.info(f"Skip existing: {not args.force}")

    config = ScraperConfig(
        language=args.lang,
        rate_limit_ms=args.rate_limit_ms,
        cache_dir=args.cache_dir,
    )
    archive = ArchiveService(
        output_dir=Path(args.output), scraper=ConferenceScraper(config)
    )
    try:
        archive.storage.ensure_directory(archive.output_dir)
    except StorageError as e:
        logger.error(f"Cannot prepare output directory: {e}", exc_info=args.verbose)
        return 1

    try:
        summary = archive.scrape_range(
            args.start, args.end, skip_existing=not args.force, show_progress=True
        )
    except KeyboardInterrupt:
        logger.warning("Scrape interrupted by user")
        return 130

    logger.info("=== Summary ===")
    logger.info(f"Scraped: {summary.scraped}")
    logger.info(f"Skipped: {summary.skipped}")
    logger.info(f"Failed: {summary.failed}")

    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
