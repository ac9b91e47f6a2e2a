"""configscout - find and load a tool's configuration, wherever it lives.

Given a module name, configscout searches upward from a directory for the
tool's config in ``package.json``/``pyproject.toml`` or in rc files such
as ``.mytoolrc.yaml``, parses the first one it finds and caches the result.

Example:
    >>> from configscout import configscout_sync
    >>> explorer = configscout_sync("mytool")
    >>> result = explorer.search()  # None if nothing was found
    >>> if result:
    ...     print(f"Loaded {result.filepath}: {result.config}")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from configscout.adapters.cache import AsyncResultCache, ResultCache
from configscout.adapters.filesystem import LocalFileSystem
from configscout.adapters.loaders import (
    DEFAULT_LOADERS,
    DEFAULT_LOADERS_SYNC,
    NO_EXT,
    load_json,
    load_python,
    load_toml,
    load_yaml,
)
from configscout.config import (
    META_SEARCH_PLACES,
    default_search_places,
    get_explorer_options,
    normalize_options,
)
from configscout.core.exceptions import (
    ConfigParseError,
    ConfigReadError,
    ConfigscoutError,
    ConfigurationError,
    MissingLoaderError,
)
from configscout.core.models import ExplorerOptions, SearchResult
from configscout.core.package_prop import get_package_prop, get_property_by_path
from configscout.core.ports import FileSystemPort, Loader, LoaderSync, Transform, TransformSync
from configscout.core.services import Explorer, ExplorerSync


if TYPE_CHECKING:
    import os
    from collections.abc import Mapping, Sequence


__version__ = "0.1.0"


def _collect_options(**kwargs: Any) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


def configscout(
    module_name: str,
    *,
    package_prop: str | Sequence[str] | None = None,
    search_places: Sequence[str] | None = None,
    ignore_empty_search_places: bool | None = None,
    stop_dir: str | os.PathLike[str] | None = None,
    cache: bool | None = None,
    loaders: Mapping[str, Loader] | None = None,
    transform: Transform | None = None,
) -> Explorer:
    """Create an async explorer for module_name.

    Options left as None take their defaults; a meta-config file in the
    current directory may override them before defaults are applied.

    Args:
        module_name: Tool name, e.g. "mytool"; drives the default search
            places (``.mytoolrc``, ``mytool.config.py``, ...) and package_prop.
        package_prop: Manifest property path(s) holding the config.
        search_places: File names to check in each directory, in order.
        ignore_empty_search_places: Skip empty files while searching (default True).
        stop_dir: Last directory to search (default: home directory).
        cache: Cache search and load results (default True).
        loaders: Extension -> loader overrides, e.g. ``{".ini": load_ini}``.
        transform: Called on every result (and on None) before returning.

    Raises:
        ConfigurationError: If the options are invalid.
    """
    options, meta_path = get_explorer_options(
        module_name,
        _collect_options(
            package_prop=package_prop,
            search_places=search_places,
            ignore_empty_search_places=ignore_empty_search_places,
            stop_dir=stop_dir,
            cache=cache,
            loaders=loaders,
            transform=transform,
        ),
    )
    return Explorer(
        normalize_options(module_name, options, sync=False, meta_config_filepath=meta_path)
    )


def configscout_sync(
    module_name: str,
    *,
    package_prop: str | Sequence[str] | None = None,
    search_places: Sequence[str] | None = None,
    ignore_empty_search_places: bool | None = None,
    stop_dir: str | os.PathLike[str] | None = None,
    cache: bool | None = None,
    loaders: Mapping[str, LoaderSync] | None = None,
    transform: TransformSync | None = None,
) -> ExplorerSync:
    """Create a synchronous explorer for module_name.

    Takes the same options as configscout(); loaders and transform must be
    plain (non-async) callables.

    Raises:
        ConfigurationError: If the options are invalid.
    """
    options, meta_path = get_explorer_options(
        module_name,
        _collect_options(
            package_prop=package_prop,
            search_places=search_places,
            ignore_empty_search_places=ignore_empty_search_places,
            stop_dir=stop_dir,
            cache=cache,
            loaders=loaders,
            transform=transform,
        ),
    )
    return ExplorerSync(
        normalize_options(module_name, options, sync=True, meta_config_filepath=meta_path)
    )


__all__ = [
    "DEFAULT_LOADERS",
    "DEFAULT_LOADERS_SYNC",
    "META_SEARCH_PLACES",
    "NO_EXT",
    "AsyncResultCache",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigscoutError",
    "ConfigurationError",
    "Explorer",
    "ExplorerOptions",
    "ExplorerSync",
    "FileSystemPort",
    "Loader",
    "LoaderSync",
    "LocalFileSystem",
    "MissingLoaderError",
    "ResultCache",
    "SearchResult",
    "Transform",
    "TransformSync",
    "__version__",
    "configscout",
    "configscout_sync",
    "default_search_places",
    "get_package_prop",
    "get_property_by_path",
    "load_json",
    "load_python",
    "load_toml",
    "load_yaml",
]
