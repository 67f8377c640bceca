"""Application and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniart import __version__


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default="AniArt", description="Application name")
    version: str = Field(default=__version__, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    Controls the level, optional JSON log file and whether console output
    goes through Rich.
    """

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(default=True, description="Render console logs with Rich")


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
