"""Configuration for halting analysis."""

from halting.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
