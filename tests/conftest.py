"""Shared fixtures for plumb tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from plumb.cache.directories import CacheDirectoriesProvider
from plumb.git_ops.handler import GitHandler
from plumb.plugins.fetcher import RemotePluginFetcher


@pytest.fixture
def cache(tmp_path):
    """Cache provider rooted in a temporary directory."""
    return CacheDirectoriesProvider(tmp_path / "cache")


@pytest.fixture
def git_handler():
    """Git double whose clone creates the checkout marker like a real clone."""
    handler = MagicMock(spec=GitHandler)

    def _clone(url, destination):
        (Path(destination) / ".git").mkdir(parents=True)

    handler.clone.side_effect = _clone
    return handler


@pytest.fixture
def fetcher(git_handler, cache):
    return RemotePluginFetcher(
        git_handler=git_handler,
        cache_directories=cache,
        download=MagicMock(return_value=b""),
        unpack=MagicMock(),
    )


@pytest.fixture
def make_plugin():
    """Create a plugin directory with a manifest and selected artifacts."""

    def _create(
        root: Path,
        name: str = "TestPlugin",
        helpers: bool = False,
        synthesizers: bool = False,
        templates: tuple[str, ...] = (),
    ) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        (root / "plugin.yaml").write_text(f"name: {name}\n")
        if helpers:
            (root / "ProjectDescriptionHelpers").mkdir()
        if synthesizers:
            (root / "ResourceSynthesizers").mkdir()
        for template in templates:
            (root / "Templates" / template).mkdir(parents=True)
        return root

    return _create
