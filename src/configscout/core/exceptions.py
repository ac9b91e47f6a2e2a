"""Domain exceptions for configscout.

All library errors inherit from ConfigscoutError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.

A configuration that simply does not exist is not an error: searches
return None for that case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class ConfigscoutError(Exception):
    """Base class for all configscout exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class ConfigurationError(ConfigscoutError):
    """Raised for invalid explorer options.

    Raised at construction time, before any search begins.
    """

    pass


class MissingLoaderError(ConfigurationError):
    """Raised when a search place or file has no loader for its extension.

    Attributes:
        extension: The extension that has no loader ("noExt" for none).
        place: The search place or path that needed the loader.
    """

    def __init__(self, extension: str, place: str) -> None:
        self.extension = extension
        self.place = place
        description = (
            "files without extensions"
            if extension == "noExt"
            else f"extension {extension!r}"
        )
        super().__init__(
            f"No loader specified for {description}, so {place!r} cannot be loaded"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest registering a loader."""
        return f"Pass loaders={{{self.extension!r}: ...}} or remove {self.place!r}"


class ConfigReadError(ConfigscoutError):
    """Raised when an existing config file cannot be read.

    Attributes:
        filepath: The file that could not be read.
        cause: The underlying OSError.
    """

    def __init__(
        self,
        message: str,
        filepath: Path,
        cause: Exception | None = None,
    ) -> None:
        self.filepath = filepath
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions."""
        return f"Check that {self.filepath} is readable"


class ConfigParseError(ConfigscoutError):
    """Raised when a loader fails to parse a config file.

    Attributes:
        filepath: Path to the config file that failed to parse.
        line: Line number where the error occurred (if available).
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        filepath: Path,
        line: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.filepath = filepath
        self.line = line
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the config file at the specific line."""
        if self.line:
            return f"Check {self.filepath.name} at line {self.line}"
        return f"Check {self.filepath.name} for syntax errors"
