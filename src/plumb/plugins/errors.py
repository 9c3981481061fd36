"""Errors raised while fetching, resolving and loading plugins."""

from pathlib import Path
from typing import Any


class PluginError(Exception):
    """Base class for plugin resolution failures."""


class RemoteFetchError(PluginError):
    """A clone, checkout or release download failed."""

    def __init__(self, url: str, reference: str, phase: str, cause: BaseException) -> None:
        self.url = url
        self.reference = reference
        self.phase = phase
        self.cause = cause
        super().__init__(f"Failed to {phase} plugin {url} at {reference}: {cause}")


class ManifestNotFoundError(PluginError):
    """No plugin manifest exists at the plugin root."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Plugin manifest not found: {path}")


class ManifestParseError(PluginError):
    """The plugin manifest exists but is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid plugin manifest {path}: {reason}")


class InvalidLocationError(PluginError):
    """A plugin location cannot be resolved to a directory."""


class PluginLoadError(PluginError):
    """Wraps the first failure of an aggregation with its context.

    Attributes:
        location: The plugin location that failed.
        index: Position of that location in the configured list.
        phase: ``resolve``, ``manifest`` or ``discover``.
        cause: The underlying exception.
    """

    def __init__(self, location: Any, index: int, phase: str, cause: BaseException) -> None:
        self.location = location
        self.index = index
        self.phase = phase
        self.cause = cause
        super().__init__(
            f"Plugin #{index + 1} ({describe_location(location)}) failed during {phase}: {cause}"
        )


def describe_location(location: Any) -> str:
    """Short human-readable form of a plugin location."""
    url = getattr(location, "url", None)
    if url is not None:
        return f"git {url}@{location.reference}"
    path = getattr(location, "path", None)
    if path is not None:
        return f"local {path}"
    return repr(location)
