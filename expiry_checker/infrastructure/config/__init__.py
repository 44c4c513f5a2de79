"""Configuration loading and logging setup."""

from .logging_config import configure_logging
from .settings import DEFAULT_CONFIG_PATH, LogSettings, Settings, load_settings

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LogSettings",
    "Settings",
    "configure_logging",
    "load_settings",
]
