"""Command-line interface for scraping a single conference.

This module scrapes one General Conference and writes its archive file
``gc-{year}-{MM}-{lang}.json`` to the output directory.
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path

from gc_podcast.infrastructure.exceptions.fetch_exceptions import FetchError
from gc_podcast.infrastructure.exceptions.storage_exceptions import StorageError
from gc_podcast.models import MONTH_NAMES, SUPPORTED_LANGUAGES, ScraperConfig
from gc_podcast.services.archive_service import ArchiveService, build_output
from gc_podcast.services.conference_scraper import ConferenceScraper


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: If True, set log level to DEBUG, otherwise INFO
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Scrape a General Conference into a JSON archive file"
    )

    parser.add_argument(
        "-y",
        "--year",
        type=int,
        default=datetime.date.today().year,
        help="Conference year (default: current year)",
    )

    parser.add_argument(
        "-m",
        "--month",
        type=int,
        choices=sorted(MONTH_NAMES),
        default=10,
        help="Conference month: 4 (April) or 10 (October) (default: 10)",
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
        "--cache-dir",
        type=str,
        default=".cache",
        help="Directory where fetched pages are cached (default: .cache)",
    )

    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Neither read nor write the page cache",
    )

    parser.add_argument(
        "--rate-limit-ms",
        type=int,
        default=500,
        help="Minimum delay between network requests in milliseconds (default: 500)",
    )

    parser.add_argument(
        "--no-session-audio",
        action="store_true",
        help="Skip fetching full-session audio",
    )

    parser.add_argument(
        "--no-talk-audio",
        action="store_true",
        help="Skip fetching talk audio and speaker details",
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while enriching talks",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ScraperConfig:
    """Build the scraper configuration from parsed arguments."""
    return ScraperConfig(
        language=args.lang,
        include_session_audio=not args.no_session_audio,
        include_talk_audio=not args.no_talk_audio,
        rate_limit_ms=args.rate_limit_ms,
        cache_dir=args.cache_dir,
        use_cache=not args.no_cache,
        show_progress=args.progress,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the single-conference scraper."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    logger.info("=== General Conference Scraper ===")
    logger.info(f"Year: {args.year}")
    logger.info(f"Month: {MONTH_NAMES[args.month]}")
    logger.info(f"Language: {args.lang}")
    logger.info(f"Output: {args.output}")

    scraper = ConferenceScraper(build_config(args))
    archive = ArchiveService(output_dir=Path(args.output), scraper=scraper)

    try:
        conference = scraper.scrape_conference(args.year, args.month)
        output_path = archive.save(build_output(conference))
    except (FetchError, StorageError) as e:
        logger.error(f"Error scraping conference: {e}", exc_info=args.verbose)
        return 1

    logger.info("=== Scraping Complete ===")
    logger.info(f"Output: {output_path}")
    logger.info(f"Sessions: {len(conference.sessions)}")
    for session in conference.sessions:
        logger.info(f"  {session.name}: {len(session.talks)} talks")
    logger.info(f"Total talks: {conference.talk_count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
