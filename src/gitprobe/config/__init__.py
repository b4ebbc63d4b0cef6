"""Configuration loading, schema, and defaults."""

from gitprobe.config.loader import ConfigError, load_config
from gitprobe.config.schema import GitProbeConfig

__all__ = [
    "ConfigError",
    "GitProbeConfig",
    "load_config",
]
