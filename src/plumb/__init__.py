"""plumb - plugin resolution and caching for build configuration."""

__version__ = "0.3.0"
