"""Configuration models."""

from aniart.config.models.api_settings import APISettings, TMDBSettings
from aniart.config.models.app_settings import AppSettings, LoggingSettings
from aniart.config.models.prefetch_settings import PrefetchSettings
from aniart.config.models.settings import Settings

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "PrefetchSettings",
    "Settings",
    "TMDBSettings",
]
