"""YAML loader.

YAML is a superset of JSON, so this loader also accepts plain JSON and is
used for extensionless rc files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from configscout.core.exceptions import ConfigParseError


if TYPE_CHECKING:
    from pathlib import Path


def load_yaml(filepath: Path, content: str) -> Any:
    """Parse content with yaml.safe_load().

    Raises:
        ConfigParseError: If content is not valid YAML. The line number is
            filled in when PyYAML reports a problem mark.
    """
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            raise ConfigParseError(
                f"YAML Error in {filepath} at line {mark.line + 1}, "
                f"column {mark.column + 1}:\n  {e}",
                filepath=filepath,
                line=mark.line + 1,
                cause=e,
            ) from e
        raise ConfigParseError(
            f"YAML Error in {filepath}:\n  {e}",
            filepath=filepath,
            cause=e,
        ) from e
