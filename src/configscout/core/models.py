"""Core domain models for configscout.

These models are pure Python dataclasses with no I/O dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self


if TYPE_CHECKING:
    from collections.abc import Mapping

    from configscout.core.ports import Loader, Transform


def identity(result: SearchResult | None) -> SearchResult | None:
    """Default transform: return the result unchanged."""
    return result


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A configuration file that was found and loaded.

    Operations return ``SearchResult | None``; None means nothing was found
    anywhere in the walk.

    Attributes:
        config: The parsed configuration. None when is_empty is True.
        filepath: Absolute path of the file the config came from.
        is_empty: True when the file exists but holds no configuration.

    Example:
        >>> result = SearchResult(config={"semi": False}, filepath=Path("/p/.toolrc"))
        >>> result.is_empty
        False
    """

    config: Any
    filepath: Path
    is_empty: bool = False

    @classmethod
    def empty(cls, filepath: Path) -> Self:
        """Build the result for a found-but-empty file."""
        return cls(config=None, filepath=filepath, is_empty=True)


@dataclass(frozen=True, slots=True)
class ExplorerOptions:
    """Normalized, immutable options an explorer is built from.

    Use configscout.config.normalize_options() to build one from user
    keyword arguments; it fills in defaults and merges loaders.

    Attributes:
        package_prop: Property path (or ordered candidate paths) used to
            pull the config out of a package manifest.
        search_places: File names, relative to each directory, checked in order.
        ignore_empty_search_places: Skip found-but-empty files during search.
        stop_dir: Last directory searched; the walk never goes above it.
        cache: Whether search and load results are cached.
        loaders: Read-only mapping from extension to loader.
        transform: Applied to every result before caching/returning.
        apply_package_property_path_to_configuration: Apply package_prop to
            every loaded file, not only package manifests.
        meta_config_filepath: Meta-config file that overrode the options.
    """

    package_prop: str | tuple[str, ...]
    search_places: tuple[str, ...]
    stop_dir: Path
    loaders: Mapping[str, Loader]
    ignore_empty_search_places: bool = True
    cache: bool = True
    transform: Transform = identity
    apply_package_property_path_to_configuration: bool = False
    meta_config_filepath: Path | None = None
