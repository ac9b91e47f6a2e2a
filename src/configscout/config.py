"""Option normalization and meta-configuration for configscout.

This module turns the keyword arguments given to configscout() and
configscout_sync() into a frozen ExplorerOptions. Before that, a project
may override the options itself with a meta-config file in the current
directory (for example a ``configscout`` table in ``pyproject.toml``).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from configscout.adapters.loaders import DEFAULT_LOADERS, DEFAULT_LOADERS_SYNC, merge_loaders
from configscout.core.exceptions import ConfigurationError
from configscout.core.explorer_base import absolute_path
from configscout.core.models import ExplorerOptions, identity


if TYPE_CHECKING:
    from configscout.core.ports import Loaders


logger = logging.getLogger(__name__)

META_PACKAGE_PROP = "configscout"

# Hardcoded: end users cannot pass options before the meta-config is read
META_SEARCH_PLACES = (
    "package.json",
    "pyproject.toml",
    ".config.json",
    ".config.yaml",
    ".config.yml",
    ".config.toml",
    ".config.py",
)

OPTION_NAMES = frozenset(
    {
        "package_prop",
        "search_places",
        "ignore_empty_search_places",
        "stop_dir",
        "cache",
        "loaders",
        "transform",
    }
)

# Meta-config files may use the camelCase spelling common in JS tooling
_CAMEL_CASE_ALIASES = {
    "packageProp": "package_prop",
    "searchPlaces": "search_places",
    "ignoreEmptySearchPlaces": "ignore_empty_search_places",
    "stopDir": "stop_dir",
}


def default_search_places(module_name: str) -> tuple[str, ...]:
    """Return the default search places for module_name, in search order.

    Example:
        >>> default_search_places("mytool")[:3]
        ('package.json', 'pyproject.toml', '.mytoolrc')
    """
    return (
        "package.json",
        "pyproject.toml",
        f".{module_name}rc",
        f".{module_name}rc.json",
        f".{module_name}rc.yaml",
        f".{module_name}rc.yml",
        f".{module_name}rc.toml",
        f".{module_name}rc.py",
        f".config/{module_name}rc",
        f".config/{module_name}rc.json",
        f".config/{module_name}rc.yaml",
        f".config/{module_name}rc.yml",
        f".config/{module_name}rc.toml",
        f".config/{module_name}rc.py",
        f"{module_name}.config.py",
    )


def replace_meta_placeholders(places: list[str] | tuple[str, ...], module_name: str) -> list[str]:
    """Substitute ``{name}`` in each search place with module_name."""
    return [place.replace("{name}", module_name) for place in places]


def _check_option_names(options: Mapping[str, Any], source: str) -> None:
    unknown = sorted(set(options) - OPTION_NAMES)
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) in {source}: {', '.join(unknown)}"
        )


def _check_option_types(options: Mapping[str, Any], source: str) -> None:
    for key in ("ignore_empty_search_places", "cache"):
        if key in options and not isinstance(options[key], bool):
            raise ConfigurationError(
                f"{key} in {source} must be true or false, "
                f"got {type(options[key]).__name__}"
            )

    search_places = options.get("search_places")
    if search_places is not None and not _is_list_of_str(search_places):
        raise ConfigurationError(
            f"search_places in {source} must be a list of file names"
        )

    package_prop = options.get("package_prop")
    if package_prop is not None and not (
        isinstance(package_prop, str) or _is_list_of_str(package_prop)
    ):
        raise ConfigurationError(
            f"package_prop in {source} must be a string or a list of strings"
        )

    stop_dir = options.get("stop_dir")
    if stop_dir is not None and not isinstance(stop_dir, (str, os.PathLike)):
        raise ConfigurationError(
            f"stop_dir in {source} must be a path, got {type(stop_dir).__name__}"
        )


def _is_list_of_str(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def normalize_options(
    module_name: str,
    options: Mapping[str, Any],
    *,
    sync: bool = True,
    meta_config_filepath: Path | None = None,
) -> ExplorerOptions:
    """Fill in defaults and build the explorer's frozen options.

    Args:
        module_name: Name used for the default search places and package_prop.
        options: User options (see OPTION_NAMES).
        sync: Pick the sync (True) or async default loaders.
        meta_config_filepath: Meta-config file the options came from, if any.

    Raises:
        ConfigurationError: For unknown options, options of the wrong type
            or a non-callable loader.
    """
    if not module_name:
        raise ConfigurationError("module_name must not be empty")
    _check_option_names(options, "options")
    _check_option_types(options, "options")

    package_prop = options.get("package_prop", module_name)
    if not isinstance(package_prop, str):
        package_prop = tuple(package_prop)

    search_places = options.get("search_places")
    if search_places is None:
        search_places = default_search_places(module_name)

    defaults: Loaders = DEFAULT_LOADERS_SYNC if sync else DEFAULT_LOADERS
    stop_dir = options.get("stop_dir")

    return ExplorerOptions(
        package_prop=package_prop,
        search_places=tuple(search_places),
        ignore_empty_search_places=options.get("ignore_empty_search_places", True),
        stop_dir=absolute_path(stop_dir) if stop_dir is not None else Path.home(),
        cache=options.get("cache", True),
        loaders=merge_loaders(defaults, options.get("loaders")),
        transform=options.get("transform") or identity,
        meta_config_filepath=meta_config_filepath,
    )


def meta_explorer_options(cwd: Path | None = None) -> ExplorerOptions:
    """Return the fixed options used to look for a meta-config file.

    Only the current directory is searched, and the configscout property is
    pulled out of every file, not just package manifests.
    """
    return ExplorerOptions(
        package_prop=META_PACKAGE_PROP,
        search_places=META_SEARCH_PLACES,
        ignore_empty_search_places=False,
        stop_dir=absolute_path(cwd if cwd is not None else "."),
        cache=True,
        loaders=DEFAULT_LOADERS_SYNC,
        transform=identity,
        apply_package_property_path_to_configuration=True,
    )


def get_explorer_options(
    module_name: str,
    options: Mapping[str, Any],
    cwd: Path | None = None,
) -> tuple[dict[str, Any], Path | None]:
    """Overlay the project's meta-config (if any) on the caller's options.

    Args:
        module_name: Substituted for ``{name}`` in meta-config search places.
        options: Caller options.
        cwd: Directory holding the meta-config (default: current directory).

    Returns:
        Tuple of (merged options, meta-config path or None).

    Raises:
        ConfigurationError: If the meta-config sets loaders, uses unknown
            keys or values of the wrong type, or is not a mapping.
    """
    from configscout.core.services import ExplorerSync

    meta_explorer = ExplorerSync(meta_explorer_options(cwd))
    meta_config = meta_explorer.search(cwd)

    if meta_config is None:
        return dict(options), None

    override = meta_config.config if meta_config.config is not None else {}
    if not isinstance(override, Mapping):
        raise ConfigurationError(
            f"Meta config in {meta_config.filepath} must be a mapping, "
            f"got {type(override).__name__}"
        )
    if "loaders" in override:
        raise ConfigurationError(
            f"Can not specify loaders in meta config file {meta_config.filepath}"
        )

    normalized = {_CAMEL_CASE_ALIASES.get(k, k): v for k, v in override.items()}
    _check_option_names(normalized, str(meta_config.filepath))
    _check_option_types(normalized, str(meta_config.filepath))
    if "search_places" in normalized:
        normalized["search_places"] = replace_meta_placeholders(
            normalized["search_places"], module_name
        )
    if "stop_dir" in normalized:
        normalized["stop_dir"] = absolute_path(
            normalized["stop_dir"], base=meta_config.filepath.parent
        )

    logger.debug("Using meta config from %s", meta_config.filepath)
    return {**options, **normalized}, meta_config.filepath
