"""Basic search-and-load example.

This example shows the simplest usage pattern: create an explorer for your
tool's name and search from the current directory. The first config found
walking up towards your home directory wins, and results are cached.
"""

from configscout import configscout_sync


# Checks package.json ("mytool" key), pyproject.toml ([tool.mytool]),
# .mytoolrc, .mytoolrc.json/.yaml/.yml/.toml/.py, .config/mytoolrc.*
# and mytool.config.py in every directory
explorer = configscout_sync("mytool")

result = explorer.search()
if result is None:
    print("No mytool configuration found; using defaults.")
    config = {}
elif result.is_empty:
    print(f"{result.filepath} is empty; using defaults.")
    config = {}
else:
    print(f"Loaded {result.filepath}")
    config = result.config

# Searching again is served from the cache
assert explorer.search() == result

# Load a known file directly, skipping the search
# result = explorer.load("configs/mytool.yaml")

# Forget cached results, e.g. after the user edits their config
explorer.clear_caches()
