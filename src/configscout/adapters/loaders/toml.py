"""TOML loader backed by the standard library tomllib."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING, Any

from configscout.core.exceptions import ConfigParseError


if TYPE_CHECKING:
    from pathlib import Path


def load_toml(filepath: Path, content: str) -> dict[str, Any]:
    """Parse content as TOML.

    Raises:
        ConfigParseError: If content is not valid TOML.
    """
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(
            f"TOML Error in {filepath}:\n  {e}",
            filepath=filepath,
            line=getattr(e, "lineno", None),
            cause=e,
        ) from e
