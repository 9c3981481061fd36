"""YAML configuration file loading with Pydantic validation."""

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .models import LocalPluginLocation, PluginsConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> Any:
    """Load a YAML file and return its parsed contents.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents, ``{}`` for an empty file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            return data
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except IsADirectoryError:
        raise ConfigError(f"Configuration path is a directory: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML config file against a Pydantic model.

    Args:
        path: Path to the YAML configuration file.
        model_class: Pydantic model class to validate against.

    Returns:
        Validated configuration model instance.

    Raises:
        ConfigError: If the file is not a mapping or validation fails.
    """
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration in {path} must be a mapping, got {type(data).__name__}"
        )
    try:
        return model_class(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def load_plugins_config(path: Path) -> PluginsConfig:
    """Load a project's plugin configuration.

    Relative local plugin paths and a relative ``cache_dir`` are resolved
    against the directory holding the configuration file.
    """
    path = Path(path)
    config = load_config(path, PluginsConfig)
    base = path.parent.resolve()

    plugins = []
    for location in config.plugins:
        if isinstance(location, LocalPluginLocation):
            local_path = location.path.expanduser()
            if not local_path.is_absolute():
                local_path = base / local_path
            location = location.model_copy(update={"path": local_path})
        plugins.append(location)

    cache_dir = config.cache_dir
    if cache_dir is not None:
        cache_dir = cache_dir.expanduser()
        if not cache_dir.is_absolute():
            cache_dir = base / cache_dir

    logger.debug(f"Loaded {len(plugins)} plugin location(s) from {path}")
    return config.model_copy(update={"plugins": plugins, "cache_dir": cache_dir})
