"""Client configuration."""

from ebics_config.configuration import ClientConfiguration
from ebics_config.settings import (
    Settings,
    clear_settings_cache,
    default_root_dir,
    get_settings,
)

__all__ = [
    "ClientConfiguration",
    "Settings",
    "clear_settings_cache",
    "default_root_dir",
    "get_settings",
]
