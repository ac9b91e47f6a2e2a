"""Strict JSON loader."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from configscout.core.exceptions import ConfigParseError


if TYPE_CHECKING:
    from pathlib import Path


def load_json(filepath: Path, content: str) -> Any:
    """Parse content as strict JSON.

    Args:
        filepath: Absolute path of the file, used in error messages.
        content: Raw file text.

    Returns:
        The decoded JSON value.

    Raises:
        ConfigParseError: If content is not valid JSON.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigParseError(
            f"JSON Error in {filepath}:\n  {e.msg} (line {e.lineno}, column {e.colno})",
            filepath=filepath,
            line=e.lineno,
            cause=e,
        ) from e
