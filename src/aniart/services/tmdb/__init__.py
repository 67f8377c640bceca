"""TMDB access: HTTP session lifecycle and the async API client."""

from aniart.services.tmdb.client import TMDBClient
from aniart.services.tmdb.session import HttpSessionManager

__all__ = ["HttpSessionManager", "TMDBClient"]
