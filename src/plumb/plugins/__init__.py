"""Plugin fetching, caching and artifact discovery."""

from .errors import (
    InvalidLocationError,
    ManifestNotFoundError,
    ManifestParseError,
    PluginError,
    PluginLoadError,
    RemoteFetchError,
)
from .fetcher import RemotePluginFetcher
from .fingerprint import fingerprint
from .manifest import PluginManifest, load_manifest
from .models import (
    PluginOrigin,
    PluginResourceSynthesizer,
    Plugins,
    ProjectDescriptionHelpersPlugin,
    RemotePluginPaths,
)
from .service import PluginService
from .templates import TemplatesDirectoryLocator

__all__ = [
    "InvalidLocationError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "PluginError",
    "PluginLoadError",
    "PluginManifest",
    "PluginOrigin",
    "PluginResourceSynthesizer",
    "PluginService",
    "Plugins",
    "ProjectDescriptionHelpersPlugin",
    "RemoteFetchError",
    "RemotePluginFetcher",
    "RemotePluginPaths",
    "TemplatesDirectoryLocator",
    "fingerprint",
    "load_manifest",
]
