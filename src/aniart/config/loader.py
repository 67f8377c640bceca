"""Locate and read the AniArt configuration.

``load_settings`` builds a fresh ``Settings`` from ``.env``, an optional TOML
file and the environment. The container calls it once per run.

A missing TMDB API key is not an error: the client reports itself as
disabled and artwork lookups resolve to definitive negatives.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from aniart.config.models.settings import Settings
from aniart.shared.errors import create_config_error

logger = logging.getLogger(__name__)

# Plain environment variable honoured when no ANIART_ key is configured
TMDB_API_KEY_ENV = "TMDB_API_KEY"

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/config.toml"),
    Path("aniart.toml"),
    Path.home() / ".aniart" / "config.toml",
)


def _load_env_file(env_file: Path = Path(".env")) -> None:
    # Variables already set in the process take precedence over .env
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def _apply_api_key_fallback(settings: Settings) -> Settings:
    """Fill api.tmdb.api_key from TMDB_API_KEY when it is not configured."""
    if settings.api.tmdb.api_key.strip():
        return settings

    fallback = os.getenv(TMDB_API_KEY_ENV, "").strip()
    if not fallback:
        logger.info("No TMDB API key configured; artwork lookups are disabled")
        return settings

    tmdb = settings.api.tmdb.model_copy(update={"api_key": fallback})
    api = settings.api.model_copy(update={"tmdb": tmdb})
    return settings.model_copy(update={"api": api})


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build Settings from ``config_path``, else the first existing default path.

    With neither, only ``.env``, ``ANIART_*`` variables and defaults apply.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ApplicationError: If the configuration fails validation
    """
    _load_env_file()

    try:
        if config_path:
            settings = Settings.from_toml_file(config_path)
        else:
            default_path = next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)
            settings = Settings.from_toml_file(default_path) if default_path else Settings()
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e.error_count()} validation error(s)",
            config_key=str(config_path) if config_path else None,
            operation="load_settings",
            original_error=e,
        ) from e

    return _apply_api_key_fallback(settings)


__all__ = ["load_settings"]
