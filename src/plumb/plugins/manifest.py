"""Plugin manifest model and reader."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plumb.config.loader import ConfigError, load_yaml

from .errors import ManifestNotFoundError, ManifestParseError

MANIFEST_FILENAME = "plugin.yaml"


class PluginManifest(BaseModel):
    """Metadata a plugin declares about itself."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)


def manifest_path(plugin_root: Path) -> Path:
    return Path(plugin_root) / MANIFEST_FILENAME


def load_manifest(plugin_root: Path) -> PluginManifest:
    """Read the manifest at the root of a plugin directory.

    Raises:
        ManifestNotFoundError: If ``plugin.yaml`` does not exist.
        ManifestParseError: If it is not valid YAML or lacks a name.
    """
    path = manifest_path(plugin_root)
    if not path.is_file():
        raise ManifestNotFoundError(path)

    try:
        data = load_yaml(path)
    except ConfigError as e:
        raise ManifestParseError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ManifestParseError(path, "expected a mapping with a 'name' key")

    try:
        return PluginManifest(**data)
    except ValidationError as e:
        raise ManifestParseError(path, str(e)) from e
