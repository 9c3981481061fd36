"""Configuration models and YAML loading."""

from .loader import ConfigError, load_config, load_plugins_config, load_yaml
from .models import (
    GitPluginLocation,
    GitReference,
    LocalPluginLocation,
    PluginLocation,
    PluginsConfig,
)

__all__ = [
    "ConfigError",
    "GitPluginLocation",
    "GitReference",
    "LocalPluginLocation",
    "PluginLocation",
    "PluginsConfig",
    "load_config",
    "load_plugins_config",
    "load_yaml",
]
