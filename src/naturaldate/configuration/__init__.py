"""Configuration loading utilities for naturaldate."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ParserSettings,
    Settings,
    bootstrap_settings,
    effective_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ParserSettings",
    "Settings",
    "bootstrap_settings",
    "effective_settings",
    "load_settings",
    "save_settings",
]
