"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite. Most explorer scenarios run against
both ExplorerSync and Explorer through the ``make_explorer`` fixture.
"""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from configscout import Explorer, ExplorerSync, SearchResult, configscout, configscout_sync
from configscout.adapters.filesystem import LocalFileSystem
from configscout.config import normalize_options


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, rules and services")
    config.addinivalue_line("markers", "loaders: Format loaders and registry")
    config.addinivalue_line("markers", "cache: Result caches")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Let pytest's tmp_path cleanup remove trees deeper than the recursion limit."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))


def write_tree(root: Path, files: dict[str, str | dict[str, Any]]) -> None:
    """Create files under root. Dict values are written as JSON."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content)


class ExplorerHarness:
    """Drives a sync or async explorer through one blocking interface.

    Async calls share one event loop for the lifetime of the harness so
    cached futures stay valid between calls.
    """

    def __init__(self, explorer: ExplorerSync | Explorer, runner: asyncio.Runner | None) -> None:
        self.explorer = explorer
        self._runner = runner

    @property
    def is_async(self) -> bool:
        return self._runner is not None

    def _run(self, value: Any) -> Any:
        if self._runner is None:
            return value
        return self._runner.run(value)

    def search(self, search_from: Path | str | None = None) -> SearchResult | None:
        return self._run(self.explorer.search(search_from))

    def load(self, filepath: Path | str) -> SearchResult | None:
        return self._run(self.explorer.load(filepath))

    def clear_load_cache(self) -> None:
        self.explorer.clear_load_cache()

    def clear_search_cache(self) -> None:
        self.explorer.clear_search_cache()

    def clear_caches(self) -> None:
        self.explorer.clear_caches()


class CountingFileSystem(LocalFileSystem):
    """LocalFileSystem that records every existence check and read."""

    def __init__(self) -> None:
        self.checked: list[Path] = []
        self.reads: list[Path] = []

    def is_file(self, path: Path) -> bool:
        self.checked.append(path)
        return super().is_file(path)

    def read_text(self, path: Path) -> str:
        self.reads.append(path)
        return super().read_text(path)


@pytest.fixture
def tree(tmp_path: Path) -> Callable[[dict[str, str | dict[str, Any]]], Path]:
    """Return a function that writes a file tree under tmp_path."""

    def write(files: dict[str, str | dict[str, Any]]) -> Path:
        write_tree(tmp_path, files)
        return tmp_path

    return write


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no meta-config is picked up."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture(params=["sync", "async"])
def explorer_mode(request: pytest.FixtureRequest) -> str:
    """Run the test once per explorer flavour."""
    return request.param


@pytest.fixture
def make_explorer(
    explorer_mode: str,
    tmp_path: Path,
    isolated_cwd: Path,
) -> Iterator[Callable[..., ExplorerHarness]]:
    """Factory building an explorer through the public factories.

    stop_dir defaults to tmp_path so searches never leave the test tree.
    """
    runner = asyncio.Runner() if explorer_mode == "async" else None

    def factory(module_name: str = "tool", **options: Any) -> ExplorerHarness:
        options.setdefault("stop_dir", tmp_path)
        if runner is None:
            return ExplorerHarness(configscout_sync(module_name, **options), None)
        return ExplorerHarness(configscout(module_name, **options), runner)

    yield factory

    if runner is not None:
        runner.close()


@pytest.fixture
def make_spied_explorer(
    explorer_mode: str,
    tmp_path: Path,
    isolated_cwd: Path,
) -> Iterator[Callable[..., tuple[ExplorerHarness, CountingFileSystem]]]:
    """Like make_explorer, but injects a CountingFileSystem."""
    runner = asyncio.Runner() if explorer_mode == "async" else None

    def factory(
        module_name: str = "tool", **options: Any
    ) -> tuple[ExplorerHarness, CountingFileSystem]:
        options.setdefault("stop_dir", tmp_path)
        fs = CountingFileSystem()
        normalized = normalize_options(module_name, options, sync=runner is None)
        explorer: ExplorerSync | Explorer
        if runner is None:
            explorer = ExplorerSync(normalized, filesystem=fs)
        else:
            explorer = Explorer(normalized, filesystem=fs)
        return ExplorerHarness(explorer, runner), fs

    yield factory

    if runner is not None:
        runner.close()


@pytest.fixture
def make_async_explorer(
    tmp_path: Path,
) -> Callable[..., tuple[Explorer, CountingFileSystem]]:
    """Build a bare async Explorer for tests that drive the event loop themselves."""

    def factory(**options: Any) -> tuple[Explorer, CountingFileSystem]:
        options.setdefault("stop_dir", tmp_path)
        fs = CountingFileSystem()
        explorer = Explorer(normalize_options("tool", options, sync=False), filesystem=fs)
        return explorer, fs

    return factory
