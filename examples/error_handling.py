"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from configscout import (
    ConfigParseError,
    ConfigReadError,
    ConfigscoutError,
    ConfigurationError,
    MissingLoaderError,
    SearchResult,
    configscout_sync,
)


# Pattern 1: Invalid options fail when the explorer is created
def create_explorer(places: list[str]):
    """Create an explorer, reporting options that could never work."""
    try:
        return configscout_sync("mytool", search_places=places)
    except MissingLoaderError as e:
        # e.g. ".mytoolrc.ini" without loaders={".ini": ...}
        print(f"No loader for {e.extension} (needed by {e.place})")
        print(f"Hint: {e.recovery_hint}")
        raise
    except ConfigurationError as e:
        print(f"Invalid options: {e}")
        raise


# Pattern 2: A broken config file stops the search
def search_or_report(places: list[str]) -> SearchResult | None:
    """Search, pointing the user at the broken line."""
    explorer = create_explorer(places)
    try:
        return explorer.search()
    except ConfigParseError as e:
        # The search never falls back to another file
        print(f"Could not parse {e.filepath}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 3: An unreadable file is an error, not a miss
def load_or_none(path: str) -> SearchResult | None:
    """Load a file the user named explicitly."""
    explorer = configscout_sync("mytool")
    try:
        return explorer.load(path)
    except ConfigReadError as e:
        print(f"Cannot read {e.filepath}: {e.cause}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 4: Catch-all for any library error
def search_safe() -> SearchResult | None:
    """Search with comprehensive error handling."""
    try:
        return configscout_sync("mytool").search()
    except ConfigscoutError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return None


# Not finding a config is not an error
result = search_safe()
print("found" if result else "no config; using defaults")
