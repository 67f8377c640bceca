"""Shared data models (TMDB responses and catalog domain objects)."""

from aniart.shared.models.domain import (
    AnimeEntity,
    BasicInfo,
    DetailRecord,
    HomeFeed,
    PreloadJob,
    PreloadSizes,
)
from aniart.shared.models.tmdb import (
    TMDBGenre,
    TMDBImage,
    TMDBImagesResponse,
    TMDBMovieDetails,
    TMDBMovieSearchItem,
    TMDBSearchResponse,
    TMDBTvDetails,
    TMDBTvSearchItem,
)

__all__ = [
    "AnimeEntity",
    "BasicInfo",
    "DetailRecord",
    "HomeFeed",
    "PreloadJob",
    "PreloadSizes",
    "TMDBGenre",
    "TMDBImage",
    "TMDBImagesResponse",
    "TMDBMovieDetails",
    "TMDBMovieSearchItem",
    "TMDBSearchResponse",
    "TMDBTvDetails",
    "TMDBTvSearchItem",
]
