"""Image warmers.

A warmer fetches one image URL so that later display hits a warm cache.
The HTTP warmer downloads the bytes and discards them; it does not decode.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from aniart.services.tmdb.session import HttpSessionManager
from aniart.shared.errors import AniArtNetworkError, ErrorCode, ErrorContext
from aniart.shared.models.domain import PreloadJob

logger = logging.getLogger(__name__)


class ImageWarmer(Protocol):
    async def warm(self, job: PreloadJob) -> None: ...


class HttpImageWarmer:
    """Fetch image bytes over the shared aiohttp session."""

    def __init__(self, session_manager: HttpSessionManager) -> None:
        self._session_manager = session_manager

    async def warm(self, job: PreloadJob) -> None:
        """GET the job's URL and read the body.

        Raises:
            AniArtNetworkError: On connection failures, timeouts or HTTP errors
        """
        session = await self._session_manager.get_session()
        context = ErrorContext(
            operation="warm_image",
            additional_data={"url": job.url, "width": job.width, "height": job.height},
        )
        try:
            async with session.get(job.url) as response:
                if response.status >= 400:
                    raise AniArtNetworkError(
                        ErrorCode.IMAGE_FETCH_FAILED,
                        f"Image request responded with HTTP {response.status}",
                        context,
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AniArtNetworkError(
                ErrorCode.IMAGE_FETCH_FAILED,
                f"Image request failed: {e}",
                context,
                original_error=e,
            ) from e

        logger.debug("Warmed %s (%d bytes) for %dx%d", job.url, len(body), job.width, job.height)


__all__ = ["HttpImageWarmer", "ImageWarmer"]
