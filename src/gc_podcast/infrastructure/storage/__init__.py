"""Storage modules for gc_podcast infrastructure layer."""

from .cache import PageCache
from .filesystem import FilesystemStorage

__all__ = ["FilesystemStorage", "PageCache"]
