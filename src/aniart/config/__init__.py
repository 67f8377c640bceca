"""AniArt configuration package."""

from aniart.config.loader import load_settings
from aniart.config.models import (
    APISettings,
    AppSettings,
    LoggingSettings,
    PrefetchSettings,
    Settings,
    TMDBSettings,
)

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "PrefetchSettings",
    "Settings",
    "TMDBSettings",
    "load_settings",
]
