"""Explorers: the public search/load services.

ExplorerSync blocks; Explorer is its asyncio counterpart. Both take every
search rule from ExplorerBase and differ only in how they perform I/O and
how they cache.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from configscout.adapters.cache import AsyncResultCache, ResultCache
from configscout.core.exceptions import ConfigscoutError, ConfigurationError
from configscout.core.explorer_base import ExplorerBase, absolute_path
from configscout.core.models import SearchResult


if TYPE_CHECKING:
    import os
    from pathlib import Path

    from configscout.core.models import ExplorerOptions
    from configscout.core.ports import FileSystemPort


logger = logging.getLogger(__name__)


class ExplorerSync(ExplorerBase):
    """Finds and loads configuration synchronously.

    Example:
        >>> from configscout import configscout_sync
        >>> explorer = configscout_sync("mytool")
        >>> result = explorer.search()
        >>> if result is not None:
        ...     print(result.filepath, result.config)
    """

    def __init__(
        self,
        options: ExplorerOptions,
        filesystem: FileSystemPort | None = None,
    ) -> None:
        super().__init__(options, filesystem)
        self._load_cache: ResultCache[SearchResult | None] = ResultCache("load")
        self._search_cache: ResultCache[SearchResult | None] = ResultCache("search")

    def search(
        self, search_from: str | os.PathLike[str] | None = None
    ) -> SearchResult | None:
        """Search upward from search_from (default: cwd) for a config file.

        Args:
            search_from: Directory to start from. A file path starts the
                search in the file's directory.

        Returns:
            The first non-skipped result, transformed, or the transform of
            None when the walk reaches the stop directory without one.

        Raises:
            ConfigParseError: If a found file cannot be parsed.
            ConfigReadError: If a found file cannot be read.
        """
        start = absolute_path(search_from) if search_from is not None else None
        directory = self._start_directory(start)
        return self._search_from_directory(directory)

    def load(self, filepath: str | os.PathLike[str]) -> SearchResult | None:
        """Load one config file, bypassing the search.

        Empty files give an empty result even when empty search places are
        ignored, since the caller asked for this file explicitly.

        Raises:
            ConfigurationError: If filepath is empty or has no loader.
            ConfigParseError: If the file cannot be parsed.
            ConfigReadError: If the file is missing or unreadable.
        """
        path = self._resolve_filepath(filepath)
        if self.config.cache and path in self._load_cache:
            logger.debug("load cache hit for %s", path)
            return self._load_cache.get(path)

        result = self._transform(self._read_file(path))
        if self.config.cache:
            self._load_cache.put(path, result)
        return result

    def _start_directory(self, start: Path | None) -> Path:
        if start is None:
            return absolute_path(".")
        if self._fs.is_dir(start):
            return start
        return start.parent

    def _search_from_directory(self, directory: Path) -> SearchResult | None:
        visited: list[Path] = []
        current = directory
        while True:
            if self.config.cache and current in self._search_cache:
                logger.debug("search cache hit for %s", current)
                result = self._search_cache.get(current)
                break

            visited.append(current)
            found = self._search_directory(current)
            next_directory = self._next_directory(current, found)
            if next_directory is None:
                result = self._transform(found)
                break
            logger.debug("Nothing found in %s, climbing to %s", current, next_directory)
            current = next_directory

        if self.config.cache:
            for visited_directory in visited:
                self._search_cache.put(visited_directory, result)
        return result

    def _search_directory(self, directory: Path) -> SearchResult | None:
        for candidate in self._candidates(directory):
            if not self._fs.is_file(candidate):
                continue
            result = self._read_file(candidate)
            if self._should_stop(result):
                logger.debug("Found config at %s", candidate)
                return result
            logger.debug("Skipping %s: no usable config", candidate)
        return None

    def _read_file(self, filepath: Path) -> SearchResult | None:
        content = self._fs.read_text(filepath)
        if self._is_blank(content):
            return SearchResult.empty(filepath)

        loader = self._loader_for(filepath)
        try:
            loaded = loader(filepath, content)
        except ConfigscoutError:
            raise
        except Exception as e:
            raise self._parse_error(filepath, e) from e

        if inspect.isawaitable(loaded):
            _discard_awaitable(loaded)
            raise ConfigurationError(
                f"Loader for {filepath.name} returned an awaitable; "
                "async loaders require the async explorer"
            )
        return self._to_result(filepath, loaded)

    def _transform(self, result: SearchResult | None) -> SearchResult | None:
        transformed = self.config.transform(result)
        if inspect.isawaitable(transformed):
            _discard_awaitable(transformed)
            raise ConfigurationError(
                "transform returned an awaitable; async transforms require "
                "the async explorer"
            )
        return transformed


class Explorer(ExplorerBase):
    """Finds and loads configuration with asyncio.

    File checks and reads run in worker threads; loaders and transforms may
    be plain functions or coroutine functions. Concurrent calls for the same
    directory or file share one underlying operation.

    Example:
        >>> from configscout import configscout
        >>> explorer = configscout("mytool")
        >>> result = await explorer.search()
    """

    def __init__(
        self,
        options: ExplorerOptions,
        filesystem: FileSystemPort | None = None,
    ) -> None:
        super().__init__(options, filesystem)
        self._load_cache = AsyncResultCache("load")
        self._search_cache = AsyncResultCache("search")

    async def search(
        self, search_from: str | os.PathLike[str] | None = None
    ) -> SearchResult | None:
        """Search upward from search_from (default: cwd) for a config file.

        See ExplorerSync.search() for the rules.
        """
        start = absolute_path(search_from) if search_from is not None else None
        directory = await self._start_directory(start)
        return await self._search_from_directory(directory)

    async def load(self, filepath: str | os.PathLike[str]) -> SearchResult | None:
        """Load one config file, bypassing the search.

        See ExplorerSync.load() for the rules.
        """
        path = self._resolve_filepath(filepath)
        if not self.config.cache:
            return await self._load_and_transform(path)
        future = self._load_cache.get_or_start(
            path, lambda: self._load_and_transform(path)
        )
        return await _await_shared(future)

    async def _load_and_transform(self, path: Path) -> SearchResult | None:
        return await self._transform(await self._read_file(path))

    async def _start_directory(self, start: Path | None) -> Path:
        if start is None:
            return absolute_path(".")
        if await asyncio.to_thread(self._fs.is_dir, start):
            return start
        return start.parent

    async def _search_from_directory(self, directory: Path) -> SearchResult | None:
        if not self.config.cache:
            return await self._search_uncached(directory)
        future = self._search_cache.get_or_start(
            directory, lambda: self._run_search(directory)
        )
        return await _await_shared(future)

    async def _run_search(self, directory: Path) -> SearchResult | None:
        result = await self._search_directory(directory)
        next_directory = self._next_directory(directory, result)
        if next_directory is not None:
            logger.debug("Nothing found in %s, climbing to %s", directory, next_directory)
            return await self._search_from_directory(next_directory)
        return await self._transform(result)

    async def _search_uncached(self, directory: Path) -> SearchResult | None:
        while True:
            result = await self._search_directory(directory)
            next_directory = self._next_directory(directory, result)
            if next_directory is None:
                return await self._transform(result)
            logger.debug("Nothing found in %s, climbing to %s", directory, next_directory)
            directory = next_directory

    async def _search_directory(self, directory: Path) -> SearchResult | None:
        for candidate in self._candidates(directory):
            if not await asyncio.to_thread(self._fs.is_file, candidate):
                continue
            result = await self._read_file(candidate)
            if self._should_stop(result):
                logger.debug("Found config at %s", candidate)
                return result
            logger.debug("Skipping %s: no usable config", candidate)
        return None

    async def _read_file(self, filepath: Path) -> SearchResult | None:
        content = await asyncio.to_thread(self._fs.read_text, filepath)
        if self._is_blank(content):
            return SearchResult.empty(filepath)

        loader = self._loader_for(filepath)
        try:
            loaded = loader(filepath, content)
            if inspect.isawaitable(loaded):
                loaded = await loaded
        except ConfigscoutError:
            raise
        except Exception as e:
            raise self._parse_error(filepath, e) from e
        return self._to_result(filepath, loaded)

    async def _transform(self, result: SearchResult | None) -> SearchResult | None:
        transformed = self.config.transform(result)
        if inspect.isawaitable(transformed):
            transformed = await transformed
        return transformed


def _discard_awaitable(awaitable: Any) -> None:
    # Avoid "coroutine was never awaited" warnings
    if inspect.iscoroutine(awaitable):
        awaitable.close()


async def _await_shared(
    future: asyncio.Future[SearchResult | None],
) -> SearchResult | None:
    """Await a cached future without letting one caller cancel it for others.

    Finished futures are read directly, so results cached under one event
    loop stay usable from another.
    """
    if future.done():
        return future.result()
    return await asyncio.shield(future)
