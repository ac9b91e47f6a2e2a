"""Loader adapters and the extension-keyed loader registry.

A loader has the signature ``(filepath: Path, content: str) -> Any`` and
returns the parsed configuration, or None when the file holds nothing.
Built-in loaders:

- JSON: load_json (``.json``)
- YAML: load_yaml (``.yaml``, ``.yml`` and files without an extension)
- TOML: load_toml (``.toml``)
- Python: load_python (``.py``)
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING

from configscout.adapters.loaders.json import load_json
from configscout.adapters.loaders.python import load_python
from configscout.adapters.loaders.toml import load_toml
from configscout.adapters.loaders.yaml import load_yaml
from configscout.core.exceptions import ConfigurationError, MissingLoaderError


if TYPE_CHECKING:
    from configscout.core.ports import Loader, Loaders, LoaderSync, LoadersSync


NO_EXT = "noExt"

# do not allow mutation of default loaders
DEFAULT_LOADERS_SYNC: LoadersSync = MappingProxyType(
    {
        ".py": load_python,
        ".json": load_json,
        ".yaml": load_yaml,
        ".yml": load_yaml,
        ".toml": load_toml,
        NO_EXT: load_yaml,
    }
)

# Parsing is CPU-bound, so the async explorer uses the same callables; only
# reading the file suspends.
DEFAULT_LOADERS: Loaders = DEFAULT_LOADERS_SYNC


def extension_of(path: str | PurePath) -> str:
    """Return the loader key for a path: its lower-cased suffix or NO_EXT.

    Dotfiles such as ``.toolrc`` have no extension.

    Example:
        >>> extension_of(".toolrc.JSON")
        '.json'
        >>> extension_of(".config/toolrc")
        'noExt'
    """
    suffix = PurePath(path).suffix
    return suffix.lower() if suffix else NO_EXT


def _normalize_key(key: str) -> str:
    if key == NO_EXT:
        return key
    return key.lower()


def merge_loaders(
    defaults: Mapping[str, Loader],
    overrides: Mapping[str, Loader] | None,
) -> Mapping[str, Loader]:
    """Return a new read-only registry with overrides layered over defaults.

    An override replaces the default for its extension only; the defaults
    mapping is never mutated.

    Raises:
        ConfigurationError: If an override is not callable.
    """
    merged: dict[str, Loader] = {_normalize_key(k): v for k, v in defaults.items()}
    for key, loader in (overrides or {}).items():
        if not callable(loader):
            raise ConfigurationError(
                f"Loader for {key!r} is not callable: {loader!r}"
            )
        merged[_normalize_key(key)] = loader
    return MappingProxyType(merged)


def resolve_loader(
    loaders: Mapping[str, LoaderSync] | Mapping[str, Loader],
    path: str | PurePath,
) -> Loader:
    """Look up the loader for path's extension.

    Raises:
        MissingLoaderError: If no loader is registered for the extension.
    """
    extension = extension_of(path)
    try:
        return loaders[extension]
    except KeyError:
        raise MissingLoaderError(extension, str(path)) from None


__all__ = [
    "DEFAULT_LOADERS",
    "DEFAULT_LOADERS_SYNC",
    "NO_EXT",
    "extension_of",
    "load_json",
    "load_python",
    "load_toml",
    "load_yaml",
    "merge_loaders",
    "resolve_loader",
]
