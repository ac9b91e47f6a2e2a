"""Async explorer example.

This example shows the asyncio explorer. File access runs in worker threads,
and concurrent searches or loads for the same path share one operation, so
many tasks can ask for the config at once without re-reading files.
"""

import asyncio
from pathlib import Path

from configscout import SearchResult, configscout


async def load_remote_defaults(filepath: Path, content: str) -> dict[str, str]:
    """Async loaders are awaited by the async explorer."""
    await asyncio.sleep(0)  # e.g. fetch shared defaults over the network
    return {"source": str(filepath), "raw": content.strip()}


async def add_defaults(result: SearchResult | None) -> SearchResult | None:
    """Transforms may be coroutines too; they also receive None."""
    if result is None or result.is_empty:
        return result
    return SearchResult(
        config={"retries": 3, **result.config},
        filepath=result.filepath,
    )


async def main() -> None:
    explorer = configscout(
        "mytool",
        loaders={".remote": load_remote_defaults},
        transform=add_defaults,
    )

    # Three concurrent searches from the same directory: one walk
    results = await asyncio.gather(
        explorer.search(),
        explorer.search(),
        explorer.search(),
    )
    found = results[0]
    print(found.filepath if found else "No configuration found.")


if __name__ == "__main__":
    asyncio.run(main())
