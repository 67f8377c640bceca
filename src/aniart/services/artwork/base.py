"""Shared resolve/cache flow for artwork repositories.

A repository answers "which image URL should be shown for this catalog id"
and owns a write-once cache of the answers. Subclasses only decide how a
URL is derived from a match; caching, short-circuits and error isolation
live here.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Union

from aniart.core.cache import EntryState, ResolutionCache
from aniart.core.matching.models import MatchNotFound
from aniart.core.matching.resolver import MatchResolver
from aniart.services.tmdb.client import TMDBClient
from aniart.shared.errors import AniArtError, ErrorContext, create_api_error
from aniart.shared.logging import log_operation_error, log_operation_success
from aniart.shared.models.domain import AnimeEntity
from aniart.shared.models.tmdb import TMDBTvSearchItem
from aniart.shared.result import Err, Ok

logger = logging.getLogger(__name__)

# Ok(url) or Ok(None) is definitive; Err leaves the id unresolved
ArtworkLookup = Union[Ok[Union[str, None]], Err]


class ArtworkRepository(ABC):
    """Resolve and cache one kind of artwork URL per catalog id."""

    artwork_kind: str = "artwork"

    def __init__(self, client: TMDBClient, resolver: MatchResolver) -> None:
        self.client = client
        self.resolver = resolver
        self._cache: ResolutionCache[str] = ResolutionCache(self.artwork_kind)

    def peek(self, entity_id: int) -> str | None:
        """Cached URL for an id, without any network access."""
        return self._cache.peek(entity_id)

    def state(self, entity_id: int) -> EntryState:
        return self._cache.state(entity_id)

    async def resolve(
        self,
        entity_id: int,
        title: str,
        year_hint: int | None = None,
    ) -> str | None:
        """Return the artwork URL for an id, resolving and caching it if needed.

        Never raises. Returns None both for a confirmed absence and for a
        transient failure; only the former is cached.
        """
        if entity_id in self._cache:
            return self._cache.peek(entity_id)

        if not self.client.enabled or not title.strip():
            self._cache.record_absent(entity_id)
            return None

        start_time = time.time()
        try:
            outcome = await self._lookup(entity_id, title, year_hint)
        except AniArtError as e:
            log_operation_error(
                logger,
                e,
                operation=f"resolve_{self.artwork_kind}",
                additional_context=ErrorContext(entity_id=entity_id),
                level=logging.WARNING,
            )
            return None
        except Exception:
            logger.exception("Unexpected error resolving %s for id=%s", self.artwork_kind, entity_id)
            return None

        if isinstance(outcome, Err):
            log_operation_error(
                logger,
                outcome.error,
                operation=f"resolve_{self.artwork_kind}",
                additional_context=ErrorContext(entity_id=entity_id),
                level=logging.WARNING,
            )
            return None

        if outcome.value:
            self._cache.record(entity_id, outcome.value)
        else:
            self._cache.record_absent(entity_id)

        log_operation_success(
            logger,
            f"resolve_{self.artwork_kind}",
            (time.time() - start_time) * 1000,
            {"found": outcome.value is not None},
            ErrorContext(entity_id=entity_id),
        )
        return self._cache.peek(entity_id)

    async def prefetch(self, entities: Iterable[AnimeEntity]) -> None:
        """Resolve every not-yet-cached entity concurrently, best effort."""
        pending: dict[int, AnimeEntity] = {}
        for entity in entities:
            if entity.id not in self._cache and entity.id not in pending:
                pending[entity.id] = entity

        if not pending:
            return

        results = await asyncio.gather(
            *(self.resolve(e.id, e.title, e.season_year) for e in pending.values()),
            return_exceptions=True,
        )
        for entity, result in zip(pending.values(), results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Prefetch of %s for id=%s failed: %s", self.artwork_kind, entity.id, result
                )

    async def _match_series(
        self, title: str, year_hint: int | None
    ) -> Ok[TMDBTvSearchItem | None] | Err:
        """Series match as a lookup outcome; Ok(None) is a confirmed miss."""
        match = await self.resolver.find_series_match(title, year_hint)
        if isinstance(match, MatchNotFound):
            if match.had_transient_error:
                return Err(
                    create_api_error(
                        f"Series search failed for {title!r}; leaving {self.artwork_kind} unresolved",
                        operation="find_series_match",
                    )
                )
            return Ok(None)
        return Ok(match.item)

    @abstractmethod
    async def _lookup(
        self,
        entity_id: int,
        title: str,
        year_hint: int | None,
    ) -> ArtworkLookup:
        """Derive the artwork URL for an uncached id."""


__all__ = ["ArtworkLookup", "ArtworkRepository"]
