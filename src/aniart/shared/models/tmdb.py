"""TMDB API Response Models.

This module defines Pydantic models for TMDB API responses to ensure
type safety and validation at the external API boundary.

All models use ConfigDict(extra="ignore") so that fields added by TMDB do
not break validation, while missing required fields fail fast.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class TMDBModel(BaseModel):
    """Lenient base for TMDB payloads."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class TMDBGenre(TMDBModel):
    """TMDB genre information.

    Example:
        >>> genre = TMDBGenre(id=16, name="Animation")
        >>> genre.name
        'Animation'
    """

    id: int = Field(..., description="TMDB genre ID")
    name: str = Field(..., description="Genre name")


class TMDBTvSearchItem(TMDBModel):
    """Single result from /search/tv."""

    id: int = Field(..., description="TMDB series ID")
    name: str | None = Field(default=None, description="Series name")
    original_name: str | None = Field(default=None, description="Original language name")
    first_air_date: str | None = Field(default=None, description="YYYY-MM-DD")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path (relative)")

    @property
    def display_title(self) -> str:
        return self.name or self.original_name or "Unknown"


class TMDBMovieSearchItem(TMDBModel):
    """Single result from /search/movie."""

    id: int = Field(..., description="TMDB movie ID")
    title: str | None = Field(default=None, description="Movie title")
    original_title: str | None = Field(default=None, description="Original language title")
    release_date: str | None = Field(default=None, description="YYYY-MM-DD")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path (relative)")

    @property
    def display_title(self) -> str:
        return self.title or self.original_title or "Unknown"


ItemT = TypeVar("ItemT")


class TMDBSearchResponse(TMDBModel, Generic[ItemT]):
    """Search response envelope. Only ``results`` is consumed."""

    page: int = 1
    total_results: int = 0
    results: list[ItemT] = Field(default_factory=list)


class TMDBImage(TMDBModel):
    """Image asset from /tv/{id}/images.

    ``iso_639_1`` is None for language-neutral artwork.
    """

    file_path: str = Field(..., description="Image path (relative)")
    width: int = 0
    height: int = 0
    iso_639_1: str | None = Field(default=None, description="ISO 639-1 language code")
    vote_average: float = 0.0
    vote_count: int = 0


class TMDBImagesResponse(TMDBModel):
    """Image collection for a series."""

    id: int | None = None
    logos: list[TMDBImage] = Field(default_factory=list)
    backdrops: list[TMDBImage] = Field(default_factory=list)
    posters: list[TMDBImage] = Field(default_factory=list)


class TMDBTvDetails(TMDBModel):
    """Details from /tv/{id}."""

    id: int
    name: str | None = None
    overview: str | None = None
    genres: list[TMDBGenre] = Field(default_factory=list)
    number_of_episodes: int | None = None
    vote_average: float | None = None
    status: str | None = None
    first_air_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None


class TMDBMovieDetails(TMDBModel):
    """Details from /movie/{id}."""

    id: int
    title: str | None = None
    overview: str | None = None
    genres: list[TMDBGenre] = Field(default_factory=list)
    runtime: int | None = None
    vote_average: float | None = None
    status: str | None = None
    release_date: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None


__all__ = [
    "TMDBGenre",
    "TMDBImage",
    "TMDBImagesResponse",
    "TMDBModel",
    "TMDBMovieDetails",
    "TMDBMovieSearchItem",
    "TMDBSearchResponse",
    "TMDBTvDetails",
    "TMDBTvSearchItem",
]
