"""Prefetch/warm-up configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniart.shared.constants import PrefetchConfig


class PrefetchSettings(BaseModel):
    """Limits for artwork prefetch and image warm-up."""

    max_jobs: int = Field(
        default=PrefetchConfig.MAX_JOBS,
        ge=0,
        description="Maximum number of warm-up jobs executed per call",
    )
    concurrency: int = Field(
        default=PrefetchConfig.CONCURRENCY,
        ge=1,
        description="Maximum number of warm-up jobs in flight",
    )
    startup_timeout: float = Field(
        default=PrefetchConfig.STARTUP_TIMEOUT,
        gt=0,
        description="Wall-clock budget in seconds for resolving the working set",
    )
    logo_width: int = Field(default=PrefetchConfig.LOGO_WIDTH, gt=0)
    logo_height: int = Field(default=PrefetchConfig.LOGO_HEIGHT, gt=0)
    home_row_take: int = Field(
        default=PrefetchConfig.HOME_ROW_TAKE,
        ge=0,
        description="Cover URLs warmed per home row",
    )
    warmup_row_take: int = Field(
        default=PrefetchConfig.WARMUP_ROW_TAKE,
        ge=0,
        description="Cover URLs listed per row by collect_warmup_urls",
    )


__all__ = ["PrefetchSettings"]
