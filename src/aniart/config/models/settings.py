"""Top-level AniArt settings.

Values come from, highest priority first: keyword arguments (including a
loaded TOML file), ``ANIART_*`` environment variables, then model defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from aniart.config.models.api_settings import APISettings
from aniart.config.models.app_settings import AppSettings, LoggingSettings
from aniart.config.models.prefetch_settings import PrefetchSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """All configuration sections.

    Nested values map to environment variables with ``__`` between levels,
    e.g. ``ANIART_API__TMDB__API_KEY`` or ``ANIART_PREFETCH__MAX_JOBS``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIART_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    prefetch: PrefetchSettings = Field(default_factory=PrefetchSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Build settings from a TOML file; sections it omits keep env/defaults.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(file_path)
        if not path.is_file():
            msg = f"Configuration file not found: {path}"
            raise FileNotFoundError(msg)

        sections = toml.loads(path.read_text(encoding="utf-8"))
        logger.debug("Read configuration sections %s from %s", sorted(sections), path)
        return cls(**sections)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Write every section to a TOML file, creating parent directories.

        The API key is written in clear text; only ``repr`` masks it.
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(toml.dumps(self.model_dump(exclude_none=True)), encoding="utf-8")


__all__ = ["Settings"]
