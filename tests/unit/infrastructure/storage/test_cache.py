"""Unit tests for the page cache module."""

import os
import tempfile
from pathlib import Path
from unittest import mock

import pytest

from gc_podcast.infrastructure.exceptions.storage_exceptions import (
    CacheError,
    FileReadError,
)
from gc_podcast.infrastructure.storage.cache import MAX_KEY_LENGTH, PageCache
from gc_podcast.infrastructure.storage.filesystem import FilesystemStorage

URL = "https://www.churchofjesuschrist.org/study/general-conference/2025/10?lang=eng"


class TestPageCache:
    """Tests for the PageCache class."""

    def test_initialization_does_not_create_directory(self) -> None:
        """Test that the cache directory is only created on first store."""
        with tempfile.TemporaryDirectory() as temp_dir:
            cache_dir = os.path.join(temp_dir, "cache")
            PageCache(cache_dir)

            assert not os.path.exists(cache_dir)

    def test_key_for(self) -> None:
        """Test that keys drop the scheme and replace unsafe characters."""
        assert (
            PageCache.key_for(URL)
            == "www_churchofjesuschrist_org_study_general_conference_2025_10_lang_eng.html"
        )
        assert PageCache.key_for("http://a.b/c") == "a_b_c.html"

    def test_key_for_is_truncated(self) -> None:
        """Test that long URLs produce bounded keys."""
        key = PageCache.key_for("https://example.com/" + "a" * 500)

        assert len(key) == MAX_KEY_LENGTH + len(".html")

    def test_store_and_get(self) -> None:
        """Test storing and retrieving a payload."""
        with tempfile.TemporaryDirectory() as temp_dir:
            cache = PageCache(os.path.join(temp_dir, "cache"))

            assert cache.store(URL, "<html>index</html>")

            # Verify the entry exists and is readable
            assert cache.exists(URL)
            assert cache.get(URL) == "<html>index</html>"
            assert cache.path_for(URL).is_file()

    def test_get_missing_entry(self) -> None:
        """Test that a missing entry is a miss."""
        with tempfile.TemporaryDirectory() as temp_dir:
            cache = PageCache(temp_dir)

            assert not cache.exists(URL)
            assert cache.get(URL) is None

    def test_empty_entry_is_a_miss(self) -> None:
        """Test that an empty cached file counts as a miss."""
        with tempfile.TemporaryDirectory() as temp_dir:
            cache = PageCache(temp_dir)
            cache.path_for(URL).write_text("", encoding="utf-8")

            assert cache.get(URL) is None

    def test_unreadable_entry_is_a_miss(self) -> None:
        """Test that read failures are reported as a miss."""
        storage = mock.MagicMock(spec=FilesystemStorage)
        storage.file_exists.return_value = True
        storage.read_text.side_effect = FileReadError("boom", file_path="x")

        cache = PageCache("/nonexistent", storage=storage)

        assert cache.get(URL) is None

    def test_unwritable_directory_is_swallowed(self) -> None:
        """Test that a failed store returns False instead of raising."""
        with tempfile.TemporaryDirectory() as temp_dir:
            # A regular file where the cache directory should be
            blocker = Path(temp_dir) / "blocker"
            blocker.write_text("x", encoding="utf-8")

            cache = PageCache(blocker)

            assert cache.store(URL, "content") is False
            assert cache.get(URL) is None

    def test_clear(self) -> None:
        """Test removing all entries."""
        with tempfile.TemporaryDirectory() as temp_dir:
            cache = PageCache(temp_dir)
            cache.store(URL, "one")
            cache.store(URL + "&x=1", "two")

            assert cache.clear() == 2
            assert cache.get(URL) is None

    def test_clear_missing_directory(self) -> None:
        """Test clearing a cache that was never written."""
        with tempfile.TemporaryDirectory() as temp_dir:
            assert PageCache(os.path.join(temp_dir, "none")).clear() == 0

    def test_clear_failure_raises_cache_error(self) -> None:
        """Test that failures while clearing raise CacheError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            storage = mock.MagicMock(spec=FilesystemStorage)
            storage.list_files.side_effect = FileReadError("boom", file_path=temp_dir)

            cache = PageCache(temp_dir, storage=storage)

            with pytest.raises(CacheError):
                cache.clear()
