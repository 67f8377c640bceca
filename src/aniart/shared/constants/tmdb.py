"""TMDB API constants."""

from __future__ import annotations

from typing import ClassVar


class TMDBConfig:
    """TMDB API specific configuration."""

    # TMDB API endpoints
    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
    SEARCH_TV_ENDPOINT = "/search/tv"
    SEARCH_MOVIE_ENDPOINT = "/search/movie"
    TV_DETAILS_ENDPOINT = "/tv/{tv_id}"
    TV_IMAGES_ENDPOINT = "/tv/{tv_id}/images"
    MOVIE_DETAILS_ENDPOINT = "/movie/{movie_id}"

    # TMDB specific rate limits
    RATE_LIMIT_RPS = 35  # requests per second
    DEFAULT_CONCURRENT_REQUESTS = 4
    REQUEST_TIMEOUT = 10

    HEADERS: ClassVar[dict[str, str]] = {
        "Accept": "application/json",
    }

    # TMDB query parameters
    DEFAULT_LANGUAGE = "en-US"
    DEFAULT_LOGO_LANGUAGE = "en"
    IMAGE_LANGUAGES = "en,null"
    DEFAULT_INCLUDE_ADULT = "false"


class TMDBErrorHandling:
    """Retry behaviour for TMDB requests."""

    RETRY_ATTEMPTS = 3
    RETRY_DELAY = 1.0
    MAX_BACKOFF = 30.0


class ImageSize:
    """TMDB image size path segments."""

    ORIGINAL = "original"
    W500 = "w500"
