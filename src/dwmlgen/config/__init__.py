"""
Configuration helpers for DWML document generation.
"""

from .models import ConfigError, DocumentConfig, PointConfig, load_config, with_overrides
from .settings import DEFAULT_ICON_BASE_URL, Settings, get_settings

__all__ = [
    "ConfigError",
    "DocumentConfig",
    "PointConfig",
    "load_config",
    "with_overrides",
    "DEFAULT_ICON_BASE_URL",
    "Settings",
    "get_settings",
]
