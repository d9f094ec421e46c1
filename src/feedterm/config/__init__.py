"""Configuration package."""

from feedterm.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
