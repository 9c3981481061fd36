"""Resolved plugin artifacts and the aggregate handed to configuration loading."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class PluginOrigin(str, Enum):
    """Where a plugin's files came from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class RemotePluginPaths:
    """On-disk locations of one cached remote plugin."""

    repository_path: Path
    release_path: Path | None = None


@dataclass(frozen=True)
class ProjectDescriptionHelpersPlugin:
    """Shared configuration helpers exposed by a plugin."""

    name: str
    path: Path
    origin: PluginOrigin


@dataclass(frozen=True)
class PluginResourceSynthesizer:
    """Resource accessor templates exposed by a plugin."""

    name: str
    path: Path


@dataclass
class Plugins:
    """All artifacts contributed by the configured plugins.

    Each list follows the order of the configured plugin locations.
    Entries are never deduplicated; two plugins exposing helpers under the
    same name both appear.
    """

    project_description_helpers: list[ProjectDescriptionHelpersPlugin] = field(
        default_factory=list
    )
    resource_synthesizers: list[PluginResourceSynthesizer] = field(default_factory=list)
    template_paths: list[Path] = field(default_factory=list)

    @classmethod
    def none(cls) -> "Plugins":
        return cls()

    def merge(self, other: "Plugins") -> "Plugins":
        """Return a new aggregate with ``other``'s entries appended."""
        return Plugins(
            project_description_helpers=[
                *self.project_description_helpers,
                *other.project_description_helpers,
            ],
            resource_synthesizers=[*self.resource_synthesizers, *other.resource_synthesizers],
            template_paths=[*self.template_paths, *other.template_paths],
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.project_description_helpers
            or self.resource_synthesizers
            or self.template_paths
        )
