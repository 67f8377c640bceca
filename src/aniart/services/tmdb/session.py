"""Shared aiohttp session lifecycle.

One ClientSession is shared by the TMDB client and the image warmer. It is
created lazily inside the running event loop and closed explicitly.
"""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from aniart import __version__

logger = logging.getLogger(__name__)


class HttpSessionManager:
    """Owns the aiohttp.ClientSession used for all outbound HTTP."""

    def __init__(
        self,
        timeout: float = 30.0,
        connection_limit: int = 32,
        user_agent: str = f"AniArt/{__version__}",
    ) -> None:
        self._timeout = timeout
        self._connection_limit = connection_limit
        self._user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = self._create_session()
                logger.debug("aiohttp.ClientSession created")
            return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            limit=self._connection_limit,
            enable_cleanup_closed=True,
        )
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        headers = {
            "User-Agent": self._user_agent,
            "Accept-Encoding": "gzip, deflate",
        }
        return aiohttp.ClientSession(connector=connector, timeout=timeout, headers=headers)

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def close(self) -> None:
        """Close the HTTP session and release its connections."""
        async with self._session_lock:
            if self._session is not None and not self._session.closed:
                await self._session.close()
                logger.debug("aiohttp.ClientSession closed")
            self._session = None


__all__ = ["HttpSessionManager"]
