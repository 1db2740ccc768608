"""Configuration package."""

from src.config.settings import (
    ActualSettings,
    AppSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "ActualSettings",
    "AppSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
