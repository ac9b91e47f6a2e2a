"""Local filesystem adapter implementing FileSystemPort."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

from configscout.core.exceptions import ConfigReadError


if TYPE_CHECKING:
    from pathlib import Path


class LocalFileSystem:
    """Read-only access to the local filesystem.

    Only "does not exist" counts as a miss. Any other OSError (permissions,
    I/O errors) is raised as ConfigReadError so that a config file the user
    cannot read is never silently skipped.
    """

    def _stat_mode(self, path: Path) -> int | None:
        try:
            return path.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise ConfigReadError(
                f"Cannot access {path}: {e.strerror or e}",
                filepath=path,
                cause=e,
            ) from e

    def is_file(self, path: Path) -> bool:
        """Return True if path exists and is a regular file.

        Raises:
            ConfigReadError: If the path cannot be inspected.
        """
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    def is_dir(self, path: Path) -> bool:
        """Return True if path exists and is a directory.

        Raises:
            ConfigReadError: If the path cannot be inspected.
        """
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text.

        Args:
            path: Absolute path of the file.

        Returns:
            The file contents.

        Raises:
            ConfigReadError: If the file is missing or cannot be read/decoded.
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else e
            raise ConfigReadError(
                f"Cannot read {path}: {reason}",
                filepath=path,
                cause=e,
            ) from e
