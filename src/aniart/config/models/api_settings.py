"""TMDB connection settings."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniart.shared.constants import TMDBConfig, TMDBErrorHandling


class TMDBSettings(BaseModel):
    """How AniArt talks to TMDB.

    An empty ``api_key`` is valid: the client then reports itself disabled
    and every artwork or details lookup is a definitive negative. The key
    is excluded from ``repr``.
    """

    api_key: str = Field(default="", repr=False, description="TMDB v3 API key")

    base_url: str = Field(default=TMDBConfig.BASE_URL, description="API root")
    image_base_url: str = Field(default=TMDBConfig.IMAGE_BASE_URL, description="Image CDN root")
    language: str = Field(
        default=TMDBConfig.DEFAULT_LANGUAGE,
        description="Language sent with detail requests",
    )
    logo_language: str = Field(
        default=TMDBConfig.DEFAULT_LOGO_LANGUAGE,
        description="ISO 639-1 code ranked first when choosing a logo",
    )

    timeout: float = Field(default=TMDBConfig.REQUEST_TIMEOUT, gt=0, description="Seconds per request")
    retry_attempts: int = Field(
        default=TMDBErrorHandling.RETRY_ATTEMPTS,
        ge=0,
        description="Retries after the first attempt for transient failures",
    )
    retry_delay: float = Field(
        default=TMDBErrorHandling.RETRY_DELAY,
        ge=0,
        description="Backoff base in seconds, doubled per retry",
    )
    rate_limit_rps: float = Field(default=TMDBConfig.RATE_LIMIT_RPS, gt=0, description="Requests per second")
    concurrent_requests: int = Field(
        default=TMDBConfig.DEFAULT_CONCURRENT_REQUESTS,
        gt=0,
        description="Requests in flight at once",
    )

    def __repr__(self) -> str:
        key_state = "set" if self.api_key.strip() else "missing"
        return (
            f"TMDBSettings(api_key=<{key_state}>, base_url={self.base_url!r}, "
            f"timeout={self.timeout}, retry_attempts={self.retry_attempts}, "
            f"rate_limit_rps={self.rate_limit_rps})"
        )


class APISettings(BaseModel):
    """External API sections; TMDB is the only one."""

    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)


__all__ = ["APISettings", "TMDBSettings"]
