"""
AniArt Constants Module

Centralized constants so that magic values (endpoints, image sizes,
prefetch limits) have a single source of truth.
"""

from .prefetch import PrefetchConfig
from .tmdb import ImageSize, TMDBConfig, TMDBErrorHandling

__all__ = [
    "ImageSize",
    "PrefetchConfig",
    "TMDBConfig",
    "TMDBErrorHandling",
]
