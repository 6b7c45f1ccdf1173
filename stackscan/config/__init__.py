"""Configuration package."""

from stackscan.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
