"""Core domain module for configscout.

This module contains pure Python domain models, port definitions and the
search rules. Filesystem access and parsing live in the adapters.
"""

from configscout.core.models import ExplorerOptions, SearchResult
from configscout.core.ports import AsyncCachePort, CachePort, FileSystemPort


__all__ = [
    "AsyncCachePort",
    "CachePort",
    "ExplorerOptions",
    "FileSystemPort",
    "SearchResult",
]
