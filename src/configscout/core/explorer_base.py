"""Search rules shared by the sync and async explorers.

Everything here is free of I/O: option validation, candidate ordering,
directory climbing, manifest handling and turning loader output into a
SearchResult. ExplorerSync and Explorer supply the I/O and the caches and
must not re-implement any of these rules.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from configscout.adapters.loaders import resolve_loader
from configscout.core.exceptions import (
    ConfigParseError,
    ConfigurationError,
)
from configscout.core.models import SearchResult
from configscout.core.package_prop import get_package_prop


if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from configscout.core.models import ExplorerOptions
    from configscout.core.ports import FileSystemPort, Loader


# Manifest file name -> table the property path is looked up under
PACKAGE_MANIFESTS: dict[str, str | None] = {
    "package.json": None,
    "pyproject.toml": "tool",
}


def absolute_path(path: str | os.PathLike[str], base: Path | None = None) -> Path:
    """Make path absolute against base (default: cwd) without following symlinks."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = (base or Path.cwd()) / candidate
    return Path(os.path.normpath(candidate))


class ExplorerBase:
    """Shared state and rules for ExplorerSync and Explorer.

    Attributes:
        config: The normalized options this explorer was built with.
    """

    def __init__(
        self,
        options: ExplorerOptions,
        filesystem: FileSystemPort | None = None,
    ) -> None:
        if filesystem is None:
            from configscout.adapters.filesystem import LocalFileSystem

            filesystem = LocalFileSystem()

        self.config = options
        self._fs: FileSystemPort = filesystem
        self._validate_options()

    # -- cache management -------------------------------------------------

    _load_cache: Any
    _search_cache: Any

    def clear_load_cache(self) -> None:
        """Forget every result of load()."""
        self._load_cache.clear()

    def clear_search_cache(self) -> None:
        """Forget every result of search()."""
        self._search_cache.clear()

    def clear_caches(self) -> None:
        """Forget all cached results."""
        self.clear_load_cache()
        self.clear_search_cache()

    # -- validation -------------------------------------------------------

    def _validate_options(self) -> None:
        """Fail fast on options that could never work.

        Raises:
            ConfigurationError: For an empty search place list, a search place
                without a loader, or a non-callable transform.
        """
        if not self.config.search_places:
            raise ConfigurationError("search_places must not be empty")
        for place in self.config.search_places:
            resolve_loader(self.config.loaders, place)
        if not callable(self.config.transform):
            raise ConfigurationError(
                f"transform must be callable, got {self.config.transform!r}"
            )

    # -- walking ----------------------------------------------------------

    def _candidates(self, directory: Path) -> Iterator[Path]:
        """Yield candidate files for one directory in configured order."""
        for place in self.config.search_places:
            yield directory / place

    def _should_stop(self, result: SearchResult | None) -> bool:
        """Return True if result ends the search.

        None is a miss. An empty result ends the search unless empty
        search places are being ignored.
        """
        if result is None:
            return False
        return not (result.is_empty and self.config.ignore_empty_search_places)

    def _next_directory(
        self, directory: Path, result: SearchResult | None
    ) -> Path | None:
        """Return the directory to search next, or None when the walk is over.

        The stop directory itself is searched; its parent never is.
        """
        if self._should_stop(result):
            return None
        if directory == self.config.stop_dir:
            return None
        parent = directory.parent
        if parent == directory:
            return None
        return parent

    # -- loading ----------------------------------------------------------

    def _resolve_filepath(self, filepath: str | os.PathLike[str]) -> Path:
        if not str(filepath):
            raise ConfigurationError("load() requires a non-empty file path")
        return absolute_path(filepath)

    def _loader_for(self, filepath: Path) -> Loader:
        return resolve_loader(self.config.loaders, filepath)

    def _manifest_prop(self, filepath: Path) -> str | Sequence[str] | None:
        """Return the property path to extract if filepath is a package manifest."""
        if filepath.name not in PACKAGE_MANIFESTS:
            return None
        table = PACKAGE_MANIFESTS[filepath.name]
        prop = self.config.package_prop
        if table is None:
            return prop
        if isinstance(prop, str):
            return f"{table}.{prop}"
        return tuple(f"{table}.{p}" for p in prop)

    @staticmethod
    def _is_blank(content: str) -> bool:
        return content.strip() == ""

    def _parse_error(self, filepath: Path, error: Exception) -> ConfigParseError:
        """Wrap a non-library exception raised by a loader."""
        return ConfigParseError(
            f"Failed to load {filepath}: {type(error).__name__}: {error}",
            filepath=filepath,
            line=getattr(error, "lineno", None),
            cause=error,
        )

    def _to_result(self, filepath: Path, loaded: Any) -> SearchResult | None:
        """Turn loader output into a result.

        Returns:
            None when filepath is a package manifest without the configured
            property (a miss); an empty result when the loader produced
            nothing; otherwise the loaded config.
        """
        manifest_prop = self._manifest_prop(filepath)
        if manifest_prop is not None:
            loaded = get_package_prop(loaded, manifest_prop)
            if loaded is None:
                return None
        elif self.config.apply_package_property_path_to_configuration:
            loaded = get_package_prop(loaded, self.config.package_prop)

        if loaded is None:
            return SearchResult.empty(filepath)
        return SearchResult(config=loaded, filepath=filepath)
