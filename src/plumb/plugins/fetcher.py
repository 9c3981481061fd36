"""Populate the plugin cache from git repositories and release bundles."""

import logging
import shutil
import tempfile
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from plumb.cache.directories import CacheDirectoriesProvider
from plumb.config.models import GitPluginLocation, PluginLocation
from plumb.git_ops.handler import GitCommandError, GitHandler
from plumb.utils import archive

from .errors import RemoteFetchError
from .fingerprint import location_fingerprint
from .manifest import MANIFEST_FILENAME
from .models import RemotePluginPaths

logger = logging.getLogger(__name__)

REFERENCE_PLACEHOLDER = "{reference}"


class RemotePluginFetcher:
    """Clones, checks out and unpacks remote plugins into the cache.

    Fetching is idempotent. A repository directory that already holds a
    checkout marker (``.git`` or the plugin manifest) is trusted as-is and
    neither re-cloned nor re-checked-out; its revision is not verified.
    A clone interrupted halfway therefore stays in the cache until
    someone removes the fingerprint directory.
    """

    def __init__(
        self,
        git_handler: GitHandler | None = None,
        cache_directories: CacheDirectoriesProvider | None = None,
        download: Callable[[str], bytes] = archive.download,
        unpack: Callable[[bytes, Path], object] = archive.unpack,
    ) -> None:
        self.git_handler = git_handler or GitHandler()
        self.cache_directories = cache_directories or CacheDirectoriesProvider()
        self._download = download
        self._unpack = unpack

    def remote_plugin_paths(self, location: GitPluginLocation) -> RemotePluginPaths:
        """Compute where ``location`` lives in the cache without fetching it."""
        key = location_fingerprint(location)
        repository_path = self.cache_directories.repository_directory(key)
        if location.directory:
            repository_path = repository_path / location.directory

        # Reported whenever present on disk; only fetching needs a release_url.
        release = self.cache_directories.release_directory(key)
        release_path = release if release.exists() else None

        return RemotePluginPaths(repository_path=repository_path, release_path=release_path)

    def fetch(self, location: GitPluginLocation) -> RemotePluginPaths:
        """Make sure ``location`` is present in the cache and return its paths.

        Raises:
            RemoteFetchError: If cloning, checking out or fetching the
                release bundle fails. Nothing written so far is removed.
        """
        key = location_fingerprint(location)

        if location.release_url:
            self._fetch_release(location, key)

        repository = self.cache_directories.repository_directory(key)
        if self._is_checked_out(repository):
            logger.debug(f"Plugin {location.url}@{location.reference} already cached at {repository}")
        else:
            self._clone_and_checkout(location, repository)

        return self.remote_plugin_paths(location)

    def fetch_all(
        self,
        locations: Iterable[PluginLocation],
        max_workers: int = 1,
    ) -> list[RemotePluginPaths]:
        """Fetch every git location in ``locations``.

        Non-git locations are skipped. Results follow input order. With
        ``max_workers > 1`` one task per distinct fingerprint runs on a
        thread pool; once all of them have finished the first failure in
        input order is raised.
        """
        git_locations = [loc for loc in locations if isinstance(loc, GitPluginLocation)]
        if max_workers <= 1 or len(git_locations) <= 1:
            return [self.fetch(loc) for loc in git_locations]

        futures: dict[str, Future] = {}
        with ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="plumb-fetch",
        ) as pool:
            for loc in git_locations:
                key = location_fingerprint(loc)
                if key not in futures:
                    futures[key] = pool.submit(self.fetch, loc)

        results = []
        for loc in git_locations:
            futures[location_fingerprint(loc)].result()
            # Cheap once populated; picks up per-location directory and release.
            results.append(self.fetch(loc))
        return results

    @staticmethod
    def _is_checked_out(repository: Path) -> bool:
        return (repository / ".git").exists() or (repository / MANIFEST_FILENAME).exists()

    def _clone_and_checkout(self, location: GitPluginLocation, repository: Path) -> None:
        reference = str(location.reference)

        try:
            self.cache_directories.ensure_directory(repository.parent)
            self.git_handler.clone(location.url, repository)
        except (GitCommandError, OSError) as e:
            raise RemoteFetchError(location.url, reference, "clone", e) from e

        try:
            self.git_handler.checkout(reference, repository)
        except (GitCommandError, OSError) as e:
            raise RemoteFetchError(location.url, reference, "checkout", e) from e

    def _fetch_release(self, location: GitPluginLocation, key: str) -> None:
        release = self.cache_directories.release_directory(key)
        if release.exists():
            logger.debug(f"Release for {location.url}@{location.reference} already cached")
            return

        reference = str(location.reference)
        url = location.release_url.replace(REFERENCE_PLACEHOLDER, reference)
        try:
            plugin_directory = self.cache_directories.ensure_directory(release.parent)
            # Unpack next to the final location, then rename, so a half-written
            # bundle is never mistaken for a cached release.
            staging = Path(tempfile.mkdtemp(dir=plugin_directory, prefix=".release-"))
        except OSError as e:
            raise RemoteFetchError(location.url, reference, "release", e) from e

        try:
            data = self._download(url)
            self._unpack(data, staging)
            staging.replace(release)
        except (archive.ArchiveError, OSError) as e:
            raise RemoteFetchError(location.url, reference, "release", e) from e
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)
        logger.info(f"Cached release bundle for {location.url}@{reference} at {release}")
