"""Configuration loading utilities for approxidate."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    DateSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DateSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
