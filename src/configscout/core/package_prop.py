"""Package-manifest property extraction.

Package manifests such as ``package.json`` embed tool configuration under a
property, e.g. ``{"name": "app", "mytool": {...}}``. These helpers pull that
property out by a dotted path.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def get_property_by_path(source: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings.

    A key that literally equals the whole path wins over the dotted walk, so
    ``{"a.b": 1}`` resolves ``"a.b"`` to 1.

    Args:
        source: Parsed manifest (usually a dict).
        path: Dotted property path such as ``"tool.mytool"``.

    Returns:
        The value at path, or None when any segment is missing or an
        intermediate value is not a mapping.

    Example:
        >>> get_property_by_path({"a": {"b": 5}}, "a.b")
        5
        >>> get_property_by_path({"a": {"b": 5}}, "a.c") is None
        True
    """
    if not isinstance(source, Mapping):
        return None
    if path in source:
        return source[path]

    value: Any = source
    for segment in path.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            return None
        value = value[segment]
    return value


def get_package_prop(source: Any, package_prop: str | Sequence[str]) -> Any:
    """Extract the configured property from a parsed manifest.

    Args:
        source: Parsed manifest.
        package_prop: One dotted path, or an ordered sequence of candidate
            paths; the first candidate that resolves to a value wins.

    Returns:
        The extracted value, or None on a miss.
    """
    if isinstance(package_prop, str):
        return get_property_by_path(source, package_prop)

    for candidate in package_prop:
        value = get_property_by_path(source, candidate)
        if value is not None:
            return value
    return None
