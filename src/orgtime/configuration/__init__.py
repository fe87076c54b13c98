"""Configuration loading utilities for orgtime."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    TimestampSettings,
    bootstrap_settings,
    configure,
    get_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "TimestampSettings",
    "bootstrap_settings",
    "configure",
    "get_settings",
    "load_settings",
    "save_settings",
]
