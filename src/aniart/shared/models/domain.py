"""Catalog domain models.

Feed entities and preload jobs are frozen dataclasses; DetailRecord is a
frozen pydantic model because it is also rendered as JSON by the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class AnimeEntity:
    """A catalog item as supplied by the primary feed.

    Attributes:
        id: Primary catalog id, the join key for every cache
        title: Display title used to build search queries
        season_year: Optional year hint for matching
        banner_url: Feed-supplied wide artwork, if any
        cover_url: Feed-supplied poster artwork, if any
    """

    id: int
    title: str
    season_year: int | None = None
    banner_url: str | None = None
    cover_url: str | None = None


@dataclass(frozen=True)
class HomeFeed:
    """Home screen rows; heroes are the entities shown full-bleed."""

    heroes: tuple[AnimeEntity, ...] = ()
    recent: tuple[AnimeEntity, ...] = ()
    trending: tuple[AnimeEntity, ...] = ()
    popular: tuple[AnimeEntity, ...] = ()

    @property
    def rows(self) -> tuple[tuple[AnimeEntity, ...], ...]:
        return (self.recent, self.trending, self.popular)


@dataclass(frozen=True)
class PreloadJob:
    """Request to fetch one image URL at a target pixel size."""

    url: str
    width: int
    height: int

    def __post_init__(self) -> None:
        # Sizes below 1 are clamped to 1
        object.__setattr__(self, "width", max(self.width, 1))
        object.__setattr__(self, "height", max(self.height, 1))


@dataclass(frozen=True)
class PreloadSizes:
    """Pixel sizes images are warmed at.

    hero and poster sizes depend on the display, logos default to 520x220.
    """

    hero_width: int
    hero_height: int
    poster_width: int
    poster_height: int
    logo_width: int = 520
    logo_height: int = 220


@dataclass(frozen=True)
class BasicInfo:
    """Title and year remembered for an id, used by the details fallback."""

    title: str
    season_year: int | None = None


class DetailRecord(BaseModel):
    """Immutable details for one catalog id."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    banner_url: str | None = None
    cover_url: str | None = None
    genres: tuple[str, ...] = ()
    average_score: int | None = Field(default=None, ge=0, le=100)
    episodes: int | None = None
    format: Literal["TV", "MOVIE"] | None = None
    status: str | None = None
    season: str | None = None
    season_year: int | None = None


__all__ = [
    "AnimeEntity",
    "BasicInfo",
    "DetailRecord",
    "HomeFeed",
    "PreloadJob",
    "PreloadSizes",
]
