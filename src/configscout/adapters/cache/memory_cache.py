"""In-memory result caches implementing CachePort and AsyncCachePort."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import TYPE_CHECKING, Generic, TypeVar


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from configscout.core.models import SearchResult


logger = logging.getLogger(__name__)

V = TypeVar("V")


class ResultCache(Generic[V]):
    """Dictionary-backed cache keyed by absolute path.

    A stored None is a real entry (a search that found nothing), so use
    ``key in cache`` rather than ``cache.get(key) is None`` to test for a hit.

    Attributes:
        name: Label used in log records ("load" or "search").
    """

    def __init__(self, name: str = "cache") -> None:
        self.name = name
        self._entries: dict[Path, V] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Path) -> V | None:
        """Return the cached value or None."""
        return self._entries.get(key)

    def put(self, key: Path, value: V) -> None:
        """Store a value, replacing any existing entry."""
        self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry."""
        if self._entries:
            logger.debug("Clearing %d %s cache entries", len(self._entries), self.name)
        self._entries.clear()


class AsyncResultCache:
    """Cache of async operations keyed by absolute path.

    The future for a key is stored before its work starts, so concurrent
    requests for the same key await one shared operation. A future that
    fails (or is cancelled) is evicted once it finishes; later requests
    start a fresh attempt.
    """

    def __init__(self, name: str = "cache") -> None:
        self.name = name
        self._entries: dict[Path, asyncio.Future[SearchResult | None]] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_start(
        self,
        key: Path,
        factory: Callable[[], Awaitable[SearchResult | None]],
    ) -> asyncio.Future[SearchResult | None]:
        """Return the existing future for key, or start factory() and store it.

        Must be called from a running event loop.
        """
        existing = self._entries.get(key)
        if existing is not None:
            logger.debug("%s cache hit for %s", self.name, key)
            return existing

        future = asyncio.ensure_future(factory())
        self._entries[key] = future
        future.add_done_callback(functools.partial(self._evict_if_failed, key))
        return future

    def _evict_if_failed(
        self, key: Path, future: asyncio.Future[SearchResult | None]
    ) -> None:
        if not future.cancelled() and future.exception() is None:
            return
        # A clear() and a newer attempt may have replaced the entry meanwhile
        if self._entries.get(key) is future:
            del self._entries[key]
            logger.debug("Evicted failed %s cache entry for %s", self.name, key)

    def clear(self) -> None:
        """Drop every entry. In-flight operations keep running for their callers."""
        if self._entries:
            logger.debug("Clearing %d %s cache entries", len(self._entries), self.name)
        self._entries.clear()
