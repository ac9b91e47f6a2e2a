"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, TypeVar, runtime_checkable

from configscout.core.models import SearchResult


if TYPE_CHECKING:
    import asyncio


LoaderResult: TypeAlias = Any
LoaderSync: TypeAlias = Callable[[Path, str], LoaderResult]
Loader: TypeAlias = Callable[[Path, str], LoaderResult | Awaitable[LoaderResult]]

TransformSync: TypeAlias = Callable[[SearchResult | None], SearchResult | None]
Transform: TypeAlias = Callable[
    [SearchResult | None],
    SearchResult | None | Awaitable[SearchResult | None],
]

LoadersSync: TypeAlias = Mapping[str, LoaderSync]
Loaders: TypeAlias = Mapping[str, Loader]

V = TypeVar("V")


@runtime_checkable
class FileSystemPort(Protocol):
    """Read-only access to the local filesystem."""

    def is_file(self, path: Path) -> bool:
        """Return True if path exists and is a regular file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Return True if path exists and is a directory."""
        ...

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text.

        Raises:
            ConfigReadError: If the file exists but cannot be read.
        """
        ...


@runtime_checkable
class CachePort(Protocol[V]):
    """In-memory key/value cache owned by one explorer."""

    def get(self, key: Path) -> V | None:
        """Return the cached value or None."""
        ...

    def __contains__(self, key: object) -> bool:
        """Return True if key has an entry (even a None value)."""
        ...

    def put(self, key: Path, value: V) -> None:
        """Store a value."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...


@runtime_checkable
class AsyncCachePort(Protocol):
    """Cache of in-flight and finished async operations.

    Entries are futures, stored before the work starts so that concurrent
    requests for the same key share one operation.
    """

    def get_or_start(
        self,
        key: Path,
        factory: Callable[[], Awaitable[SearchResult | None]],
    ) -> asyncio.Future[SearchResult | None]:
        """Return the existing future for key, or start factory() and store it."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
