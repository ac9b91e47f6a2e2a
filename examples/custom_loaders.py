"""Custom loaders, search places and transforms.

This example shows how a tool can support its own file format, restrict
where configs are looked up, and post-process every result.
"""

import configparser
from pathlib import Path

from configscout import SearchResult, configscout_sync


def load_ini(filepath: Path, content: str) -> dict[str, dict[str, str]]:
    """Parse an INI file into nested dicts."""
    parser = configparser.ConfigParser()
    parser.read_string(content, source=str(filepath))
    return {section: dict(parser[section]) for section in parser.sections()}


def resolve_paths(result: SearchResult | None) -> SearchResult | None:
    """Make "output" relative to the config file, not the cwd."""
    if result is None or result.is_empty:
        return result
    config = dict(result.config)
    if "output" in config:
        config["output"] = str(result.filepath.parent / config["output"])
    return SearchResult(config=config, filepath=result.filepath)


explorer = configscout_sync(
    "mytool",
    # Checked in this order in every directory
    search_places=[
        "pyproject.toml",
        ".mytoolrc.ini",
        ".mytoolrc.yaml",
    ],
    # Extensions are matched case-insensitively; overrides replace the
    # default loader for their extension only
    loaders={".ini": load_ini},
    transform=resolve_paths,
    # Never look above the repository root
    stop_dir=Path.cwd(),
    # Return an empty .mytoolrc.* instead of skipping it
    ignore_empty_search_places=False,
)

result = explorer.search()
if result is not None:
    print(f"{result.filepath}: {result.config}")

# A project can also override these options without code changes, e.g.
# in its pyproject.toml:
#
#   [tool.configscout]
#   search_places = [".config/{name}.toml"]
