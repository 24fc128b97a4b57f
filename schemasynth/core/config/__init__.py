"""Configuration loading and management for schemasynth."""

from schemasynth.core.config.loader import ConfigLoader, clear_config_cache, load_config
from schemasynth.core.config.models import LoggingConfig, SynthConfig

__all__ = [
    "ConfigLoader",
    "LoggingConfig",
    "SynthConfig",
    "clear_config_cache",
    "load_config",
]
