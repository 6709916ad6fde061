"""Page cache for the conference scraper.

This module provides an on-disk cache of raw page and API payloads keyed
by URL, so repeated scrapes do not hit the network for content that has
already been fetched.
"""

import logging
import re
from pathlib import Path

from ..exceptions.storage_exceptions import CacheError, StorageError
from .filesystem import FilesystemStorage

# Configure logger
logger = logging.getLogger(__name__)

# Keeps cache file names well below common filesystem path limits
MAX_KEY_LENGTH = 150


class PageCache:
    """Cache manager for raw fetched payloads.

    Entries are plain text files named after the URL they were fetched from.
    Entries are never invalidated automatically; callers bypass the cache by
    disabling it or by clearing it.

    Failures while reading or writing are logged and reported as a miss
    (or an unsuccessful store) rather than raised, so an unwritable cache
    directory never breaks a scrape.
    """

    def __init__(
        self,
        cache_dir: str | Path = ".cache",
        storage: FilesystemStorage | None = None,
    ) -> None:
        """Initialize the page cache.

        Args:
            cache_dir: Directory where cache files will be stored
            storage: Optional storage backend (creates a new one if not provided)
        """
        self.cache_dir = Path(cache_dir)
        self.storage = storage or FilesystemStorage()

    @staticmethod
    def key_for(url: str) -> str:
        """Generate a deterministic, filesystem-safe cache key for a URL.

        Args:
            url: The URL being cached

        Returns
        -------
            The cache file name for the URL
        """
        key = re.sub(r"^https?://", "", url, flags=re.IGNORECASE)
        key = re.sub(r"[^a-zA-Z0-9]", "_", key)
        return f"{key[:MAX_KEY_LENGTH]}.html"

    def path_for(self, url: str) -> Path:
        """Return the cache file path for a URL."""
        return self.cache_dir / self.key_for(url)

    def exists(self, url: str) -> bool:
        """Check if a URL has a cached payload."""
        return self.storage.file_exists(self.path_for(url))

    def get(self, url: str) -> str | None:
        """Get a cached payload.

        Args:
            url: The URL whose payload to retrieve

        Returns
        -------
            The cached payload, or None on a miss or an unreadable entry
        """
        cache_path = self.path_for(url)
        if not self.storage.file_exists(cache_path):
            return None

        try:
            content = self.storage.read_text(cache_path)
        except StorageError as e:
            logger.warning(f"Ignoring unreadable cache entry for {url}: {e}")
            return None

        # An empty entry carries no page and counts as a miss
        return content or None

    def store(self, url: str, content: str) -> bool:
        """Store a fetched payload.

        Args:
            url: The URL the payload was fetched from
            content: The raw payload

        Returns
        -------
            True if the payload was written, False if the write failed
        """
        try:
            self.storage.write_text(self.path_for(url), content)
        except StorageError as e:
            logger.warning(f"Failed to cache {url}: {e}")
            return False

        logger.debug(f"Cached {url} as {self.key_for(url)}")
        return True

    def clear(self) -> int:
        """Remove every cached entry.

        Returns
        -------
            Number of entries removed

        Raises
        ------
            CacheError: If the cache cannot be cleared
        """
        if not self.cache_dir.is_dir():
            return 0

        try:
            removed = 0
            for file_path in self.storage.list_files(self.cache_dir, "*.html"):
                file_path.unlink()
                removed += 1
        except (StorageError, OSError) as e:
            raise CacheError(f"Failed to clear cache: {e}") from e

        logger.info(f"Cache cleared ({removed} entries)")
        return removed
