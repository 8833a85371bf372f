"""Configuration loading, schema, and defaults."""

from tsnarrow.config.loader import ConfigError, load_config
from tsnarrow.config.schema import REPLACEMENT_CHOICES, TsNarrowConfig

__all__ = [
    "REPLACEMENT_CHOICES",
    "ConfigError",
    "TsNarrowConfig",
    "load_config",
]
