"""Cache directory layout for fetched plugins.

The cache is append-only: directories are created lazily by writers and
never removed here. Every query re-stats the filesystem; nothing about
the cache contents is remembered between calls.
"""

import logging
import os
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_DIR_ENV = "PLUMB_CACHE_DIR"

REPOSITORY_DIRECTORY = "repository"
RELEASE_DIRECTORY = "release"


class CacheCategory(str, Enum):
    """Namespaces under the cache root."""

    PLUGINS = "plugins"


def default_cache_root() -> Path:
    """Resolve the cache root from the environment.

    Order: ``PLUMB_CACHE_DIR``, ``$XDG_CACHE_HOME/plumb``, ``~/.cache/plumb``.
    """
    explicit = os.environ.get(CACHE_DIR_ENV, "")
    if explicit:
        return Path(explicit).expanduser()
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    if xdg:
        return Path(xdg).expanduser() / "plumb"
    return Path.home() / ".cache" / "plumb"


class CacheDirectoriesProvider:
    """Maps cache categories and fingerprints to paths under one root."""

    def __init__(self, cache_root: Path | None = None) -> None:
        self.cache_root = Path(cache_root) if cache_root else default_cache_root()

    def cache_directory(self, category: CacheCategory) -> Path:
        return self.cache_root / category.value

    def plugin_directory(self, fingerprint: str) -> Path:
        return self.cache_directory(CacheCategory.PLUGINS) / fingerprint

    def repository_directory(self, fingerprint: str) -> Path:
        return self.plugin_directory(fingerprint) / REPOSITORY_DIRECTORY

    def release_directory(self, fingerprint: str) -> Path:
        return self.plugin_directory(fingerprint) / RELEASE_DIRECTORY

    @staticmethod
    def ensure_directory(path: Path) -> Path:
        """Create ``path`` and its parents if missing."""
        if not path.exists():
            logger.debug(f"Creating cache directory {path}")
        path.mkdir(parents=True, exist_ok=True)
        return path
