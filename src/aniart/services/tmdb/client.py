"""Async TMDB API client.

This module provides an asynchronous client for The Movie Database (TMDB)
v3 API built on aiohttp, with token-bucket rate limiting (aiolimiter), a
concurrency cap, and bounded retries with exponential backoff.

Every failure is raised as an AniArtError subclass; deciding what a
failure means (transient vs. definitive) is left to the callers.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
import time
from typing import Any, TypeVar

import aiohttp
from aiolimiter import AsyncLimiter
from pydantic import BaseModel, ValidationError

from aniart.config.models.api_settings import TMDBSettings
from aniart.services.tmdb.session import HttpSessionManager
from aniart.shared.constants import TMDBConfig, TMDBErrorHandling
from aniart.shared.errors import (
    AniArtNetworkError,
    AniArtParsingError,
    ErrorCode,
    ErrorContext,
    SecurityError,
    create_parsing_error,
)
from aniart.shared.logging import log_operation_success
from aniart.shared.models.tmdb import (
    TMDBImagesResponse,
    TMDBMovieDetails,
    TMDBMovieSearchItem,
    TMDBSearchResponse,
    TMDBTvDetails,
    TMDBTvSearchItem,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

RETRYABLE_ERROR_CODES = frozenset(
    {
        ErrorCode.TMDB_API_CONNECTION_ERROR,
        ErrorCode.TMDB_API_TIMEOUT,
        ErrorCode.TMDB_API_RATE_LIMIT_EXCEEDED,
        ErrorCode.TMDB_API_SERVER_ERROR,
    }
)


class TMDBClient:
    """TMDB v3 client used for search, images and details.

    Example:
        >>> async with TMDBClient(settings.api.tmdb, HttpSessionManager()) as client:
        ...     items = await client.search_tv("Frieren", year=2023)
    """

    def __init__(
        self,
        settings: TMDBSettings,
        session_manager: HttpSessionManager,
    ) -> None:
        """Initialize the client.

        Args:
            settings: TMDB configuration (API key, endpoints, limits)
            session_manager: Provider of the shared aiohttp session
        """
        self.settings = settings
        self._session_manager = session_manager
        self._rate_limiter = AsyncLimiter(settings.rate_limit_rps, 1)
        self._concurrency_limiter = asyncio.Semaphore(settings.concurrent_requests)
        self._timeout = aiohttp.ClientTimeout(total=settings.timeout)
        self._stats: dict[str, int] = {
            "requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "retries": 0,
        }

    @property
    def enabled(self) -> bool:
        """False when no API key is configured."""
        return bool(self.settings.api_key.strip())

    async def search_tv(self, query: str, year: int | None = None) -> list[TMDBTvSearchItem]:
        """Search TV series, optionally restricted to a first-air year."""
        payload = await self._make_request(
            TMDBConfig.SEARCH_TV_ENDPOINT,
            {
                "query": query,
                "first_air_date_year": year,
                "include_adult": TMDBConfig.DEFAULT_INCLUDE_ADULT,
            },
            operation="search_tv",
        )
        response = self._parse(TMDBSearchResponse[TMDBTvSearchItem], payload, "search_tv")
        return response.results

    async def search_movie(
        self, query: str, year: int | None = None
    ) -> list[TMDBMovieSearchItem]:
        """Search movies, optionally restricted to a primary release year."""
        payload = await self._make_request(
            TMDBConfig.SEARCH_MOVIE_ENDPOINT,
            {
                "query": query,
                "primary_release_year": year,
                "include_adult": TMDBConfig.DEFAULT_INCLUDE_ADULT,
            },
            operation="search_movie",
        )
        response = self._parse(TMDBSearchResponse[TMDBMovieSearchItem], payload, "search_movie")
        return response.results

    async def tv_images(self, series_id: int) -> TMDBImagesResponse:
        """Fetch logos/backdrops/posters for a series (English and language-neutral)."""
        payload = await self._make_request(
            TMDBConfig.TV_IMAGES_ENDPOINT.format(tv_id=series_id),
            {"include_image_language": TMDBConfig.IMAGE_LANGUAGES},
            operation="tv_images",
        )
        return self._parse(TMDBImagesResponse, payload, "tv_images")

    async def tv_details(self, series_id: int) -> TMDBTvDetails:
        payload = await self._make_request(
            TMDBConfig.TV_DETAILS_ENDPOINT.format(tv_id=series_id),
            {"language": self.settings.language},
            operation="tv_details",
        )
        return self._parse(TMDBTvDetails, payload, "tv_details")

    async def movie_details(self, movie_id: int) -> TMDBMovieDetails:
        payload = await self._make_request(
            TMDBConfig.MOVIE_DETAILS_ENDPOINT.format(movie_id=movie_id),
            {"language": self.settings.language},
            operation="movie_details",
        )
        return self._parse(TMDBMovieDetails, payload, "movie_details")

    def image_url(self, path: str | None, size: str) -> str | None:
        """Build a CDN URL for an image path, or None for a blank path.

        Example:
            >>> client.image_url("/abc.jpg", "w500")
            'https://image.tmdb.org/t/p/w500/abc.jpg'
        """
        if not path or not path.strip():
            return None
        base = self.settings.image_base_url.rstrip("/")
        return f"{base}/{size}/{path.strip().lstrip('/')}"

    async def _make_request(
        self,
        endpoint: str,
        params: dict[str, Any],
        *,
        operation: str,
    ) -> Any:
        """GET an endpoint with retries and return the decoded JSON body.

        Raises:
            SecurityError: If the client has no API key
            AniArtNetworkError: On connection, timeout or HTTP status failures
            AniArtParsingError: If the body is not valid JSON
        """
        if not self.enabled:
            raise SecurityError(
                ErrorCode.MISSING_CONFIG,
                "TMDB API key is not configured",
                ErrorContext(operation=operation),
            )

        url = f"{self.settings.base_url.rstrip('/')}{endpoint}"
        request_params = {
            "api_key": self.settings.api_key.strip(),
            **{key: str(value) for key, value in params.items() if value is not None},
        }
        context = ErrorContext(operation=operation, additional_data={"endpoint": endpoint})

        max_attempts = self.settings.retry_attempts + 1
        start_time = time.time()
        for attempt in range(max_attempts):
            try:
                payload = await self._send(url, request_params, context)
            except AniArtNetworkError as e:
                if e.code not in RETRYABLE_ERROR_CODES or attempt + 1 >= max_attempts:
                    self._stats["failed_requests"] += 1
                    raise
                delay = self._retry_delay(attempt, e)
                self._stats["retries"] += 1
                logger.warning(
                    "TMDB request failed (attempt %d/%d), retrying in %.2fs: %s",
                    attempt + 1,
                    max_attempts,
                    delay,
                    e,
                )
                await asyncio.sleep(delay)
            except AniArtParsingError:
                self._stats["failed_requests"] += 1
                raise
            else:
                self._stats["successful_requests"] += 1
                log_operation_success(
                    logger,
                    operation,
                    (time.time() - start_time) * 1000,
                    {"attempts": attempt + 1},
                    context,
                )
                return payload

        # Unreachable: the loop either returns or raises on the last attempt
        raise AssertionError("retry loop exited without a result")

    async def _send(
        self,
        url: str,
        params: dict[str, str],
        context: ErrorContext,
    ) -> Any:
        session = await self._session_manager.get_session()

        async with self._rate_limiter:
            async with self._concurrency_limiter:
                self._stats["requests"] += 1
                try:
                    async with session.get(
                        url,
                        params=params,
                        headers=TMDBConfig.HEADERS,
                        timeout=self._timeout,
                    ) as response:
                        status = response.status
                        retry_after = response.headers.get("Retry-After")
                        body = await response.read()
                except asyncio.TimeoutError as e:
                    raise AniArtNetworkError(
                        ErrorCode.TMDB_API_TIMEOUT,
                        f"TMDB request timed out after {self.settings.timeout}s",
                        context,
                        original_error=e,
                    ) from e
                except aiohttp.ClientError as e:
                    raise AniArtNetworkError(
                        ErrorCode.TMDB_API_CONNECTION_ERROR,
                        f"TMDB connection failed: {e}",
                        context,
                        original_error=e,
                    ) from e

        if status >= 400:
            raise self._status_error(status, retry_after, context)

        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise AniArtParsingError(
                ErrorCode.TMDB_API_INVALID_RESPONSE,
                "TMDB returned a body that is not valid UTF-8 JSON",
                context,
                original_error=e,
            ) from e

    def _status_error(
        self,
        status: int,
        retry_after: str | None,
        context: ErrorContext,
    ) -> AniArtNetworkError:
        if status == 429:
            code = ErrorCode.TMDB_API_RATE_LIMIT_EXCEEDED
        elif status >= 500:
            code = ErrorCode.TMDB_API_SERVER_ERROR
        elif status == 401:
            code = ErrorCode.TMDB_API_AUTHENTICATION_ERROR
        else:
            code = ErrorCode.TMDB_API_REQUEST_FAILED

        additional_data: dict[str, Any] = dict(context.additional_data or {})
        additional_data["status_code"] = status
        parsed_retry_after = _extract_retry_after(retry_after)
        if parsed_retry_after is not None:
            additional_data["retry_after"] = parsed_retry_after

        return AniArtNetworkError(
            code,
            f"TMDB responded with HTTP {status}",
            ErrorContext(operation=context.operation, additional_data=additional_data),
        )

    def _retry_delay(self, attempt: int, error: AniArtNetworkError) -> float:
        """Exponential backoff with jitter, never shorter than Retry-After."""
        base_delay = self.settings.retry_delay * (2**attempt)
        delay = base_delay + random.uniform(0, base_delay * 0.1)

        retry_after = (error.context.additional_data or {}).get("retry_after")
        if isinstance(retry_after, (int, float)):
            delay = max(delay, float(retry_after))

        return min(delay, TMDBErrorHandling.MAX_BACKOFF)

    def _parse(self, model: type[ModelT], payload: Any, operation: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise create_parsing_error(
                f"TMDB response does not match {model.__name__}: {e.error_count()} error(s)",
                model_name=model.__name__,
                operation=operation,
                original_error=e,
            ) from e

    def get_stats(self) -> dict[str, Any]:
        """Get current request statistics and limits."""
        return {
            **self._stats,
            "enabled": self.enabled,
            "rate_limit_rps": self.settings.rate_limit_rps,
            "concurrency_limit": self.settings.concurrent_requests,
        }

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._session_manager.close()

    async def __aenter__(self) -> TMDBClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def _extract_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds."""
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


__all__ = ["TMDBClient"]
