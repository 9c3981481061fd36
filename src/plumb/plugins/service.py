"""Resolve configured plugin locations and aggregate their artifacts."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from plumb.config.models import GitPluginLocation, LocalPluginLocation, PluginLocation

from .errors import (
    InvalidLocationError,
    ManifestNotFoundError,
    ManifestParseError,
    PluginLoadError,
    RemoteFetchError,
)
from .fetcher import RemotePluginFetcher
from .manifest import PluginManifest, load_manifest
from .models import (
    PluginOrigin,
    PluginResourceSynthesizer,
    Plugins,
    ProjectDescriptionHelpersPlugin,
    RemotePluginPaths,
)
from .templates import TemplatesDirectoryLocator

logger = logging.getLogger(__name__)

HELPERS_DIRECTORY = "ProjectDescriptionHelpers"
RESOURCE_SYNTHESIZERS_DIRECTORY = "ResourceSynthesizers"


@dataclass(frozen=True)
class ResolvedPlugin:
    """A plugin location mapped to the directory holding its manifest."""

    directory: Path
    origin: PluginOrigin
    location: PluginLocation


class PluginService:
    """Loads plugins from local directories and the remote plugin cache.

    Args:
        fetcher: Fetcher used for git locations.
        templates_locator: Finds template directories inside a plugin.
        manifest_loader: Reads a plugin's manifest from its root directory.
        root_directory: Base for relative local plugin paths. Defaults to
            the current working directory at resolution time.
    """

    def __init__(
        self,
        fetcher: RemotePluginFetcher | None = None,
        templates_locator: TemplatesDirectoryLocator | None = None,
        manifest_loader: Callable[[Path], PluginManifest] = load_manifest,
        root_directory: Path | None = None,
    ) -> None:
        self.fetcher = fetcher or RemotePluginFetcher()
        self.templates_locator = templates_locator or TemplatesDirectoryLocator()
        self.manifest_loader = manifest_loader
        self.root_directory = root_directory

    # ------------------------------------------------------------------
    # Remote cache
    # ------------------------------------------------------------------

    def remote_plugin_paths(
        self, locations: Sequence[PluginLocation]
    ) -> list[RemotePluginPaths]:
        """Cache paths of every git location, without fetching."""
        return [
            self.fetcher.remote_plugin_paths(loc)
            for loc in locations
            if isinstance(loc, GitPluginLocation)
        ]

    def fetch_remote_plugins(
        self,
        locations: Sequence[PluginLocation],
        max_workers: int = 1,
    ) -> list[RemotePluginPaths]:
        """Populate the cache for every git location."""
        return self.fetcher.fetch_all(locations, max_workers=max_workers)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def resolve(self, location: PluginLocation) -> ResolvedPlugin:
        """Map a location to its plugin root directory.

        Git locations are fetched into the cache first.

        Raises:
            InvalidLocationError: If the directory does not exist.
            RemoteFetchError: If a git location cannot be fetched.
        """
        if isinstance(location, LocalPluginLocation):
            directory = Path(location.path).expanduser()
            if not directory.is_absolute():
                directory = (self.root_directory or Path.cwd()) / directory
            origin = PluginOrigin.LOCAL
        elif isinstance(location, GitPluginLocation):
            directory = self.fetcher.fetch(location).repository_path
            origin = PluginOrigin.REMOTE
        else:
            raise InvalidLocationError(f"Unsupported plugin location: {location!r}")

        if not directory.is_dir():
            raise InvalidLocationError(f"Plugin directory does not exist: {directory}")
        return ResolvedPlugin(directory=directory, origin=origin, location=location)

    def discover(self, manifest: PluginManifest, resolved: ResolvedPlugin) -> Plugins:
        """Collect the helpers, resource synthesizers and templates of one plugin."""
        plugins = Plugins()

        helpers = resolved.directory / HELPERS_DIRECTORY
        if helpers.is_dir():
            plugins.project_description_helpers.append(
                ProjectDescriptionHelpersPlugin(
                    name=manifest.name, path=helpers, origin=resolved.origin
                )
            )

        synthesizers = resolved.directory / RESOURCE_SYNTHESIZERS_DIRECTORY
        if synthesizers.is_dir():
            plugins.resource_synthesizers.append(
                PluginResourceSynthesizer(name=manifest.name, path=synthesizers)
            )

        plugins.template_paths.extend(self.templates_locator.locate(resolved.directory))
        return plugins

    def load_plugin(self, location: PluginLocation, index: int = 0) -> Plugins:
        """Resolve, read and discover a single plugin.

        Raises:
            PluginLoadError: Wrapping the failure with the phase it occurred in.
        """
        try:
            resolved = self.resolve(location)
        except (InvalidLocationError, RemoteFetchError) as e:
            raise PluginLoadError(location, index, "resolve", e) from e

        try:
            manifest = self.manifest_loader(resolved.directory)
        except (ManifestNotFoundError, ManifestParseError) as e:
            raise PluginLoadError(location, index, "manifest", e) from e

        try:
            plugins = self.discover(manifest, resolved)
        except OSError as e:
            raise PluginLoadError(location, index, "discover", e) from e

        logger.debug(
            f"Loaded plugin '{manifest.name}' from {resolved.directory} "
            f"({len(plugins.project_description_helpers)} helpers, "
            f"{len(plugins.resource_synthesizers)} synthesizers, "
            f"{len(plugins.template_paths)} templates)"
        )
        return plugins

    def load_plugins(
        self,
        locations: Sequence[PluginLocation],
        prefetch: bool = False,
        max_workers: int = 1,
    ) -> Plugins:
        """Load every configured plugin and merge the results in order.

        Stops at the first location that fails; later locations are not
        touched and no partial aggregate is returned.

        Args:
            locations: Plugin locations in configuration order.
            prefetch: Fetch all git locations before loading, optionally in
                parallel. Loading order and the result are unaffected.
            max_workers: Thread count for the prefetch step.

        Raises:
            PluginLoadError: For the first location that fails.
            RemoteFetchError: If prefetching fails for a remote that is not
                among ``locations``.
        """
        if prefetch:
            try:
                self.fetch_remote_plugins(locations, max_workers=max_workers)
            except RemoteFetchError as e:
                failed = self._failed_location(locations, e)
                if failed is None:
                    raise
                index, location = failed
                raise PluginLoadError(location, index, "resolve", e) from e

        result = Plugins.none()
        for index, location in enumerate(locations):
            result = result.merge(self.load_plugin(location, index))

        logger.info(
            f"Loaded {len(locations)} plugin(s): "
            f"{len(result.project_description_helpers)} helpers, "
            f"{len(result.resource_synthesizers)} resource synthesizers, "
            f"{len(result.template_paths)} templates"
        )
        return result

    @staticmethod
    def _failed_location(
        locations: Sequence[PluginLocation], error: RemoteFetchError
    ) -> tuple[int, GitPluginLocation] | None:
        for index, location in enumerate(locations):
            if (
                isinstance(location, GitPluginLocation)
                and location.url == error.url
                and str(location.reference) == error.reference
            ):
                return index, location
        return None
