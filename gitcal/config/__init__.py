"""Configuration package."""

from gitcal.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
