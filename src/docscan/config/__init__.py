"""Configuration loading, schema, and defaults."""

from docscan.config.loader import ConfigError, load_config
from docscan.config.schema import DocScanConfig

__all__ = [
    "ConfigError",
    "DocScanConfig",
    "load_config",
]
