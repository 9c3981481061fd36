"""On-disk cache layout."""

from .directories import (
    RELEASE_DIRECTORY,
    REPOSITORY_DIRECTORY,
    CacheCategory,
    CacheDirectoriesProvider,
)

__all__ = [
    "CacheCategory",
    "CacheDirectoriesProvider",
    "RELEASE_DIRECTORY",
    "REPOSITORY_DIRECTORY",
]
