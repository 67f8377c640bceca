"""Fallback catalog details from TMDB.

Used when the primary catalog cannot serve an entity's details. The
display title is matched against TV search first and, only when no series
matches, against movie search; the matched item's details are mapped to a
DetailRecord and cached for the rest of the process.
"""

from __future__ import annotations

import logging
import math
import time

from aniart.core.cache import ResolutionCache
from aniart.core.matching.candidates import build_candidate_queries
from aniart.core.matching.models import MatchFound, MatchKind
from aniart.core.matching.resolver import MatchResolver
from aniart.services.tmdb.client import TMDBClient
from aniart.shared.constants import ImageSize
from aniart.shared.errors import AniArtError, ErrorContext
from aniart.shared.logging import log_operation_error, log_operation_success
from aniart.shared.models.domain import DetailRecord
from aniart.shared.models.tmdb import TMDBMovieDetails, TMDBTvDetails

logger = logging.getLogger(__name__)


def score_from_vote_average(vote_average: float | None) -> int | None:
    """Convert a 0-10 vote average to a 0-100 score, rounding halves up.

    Examples:
        >>> score_from_vote_average(7.25)
        73
        >>> score_from_vote_average(None) is None
        True
    """
    if vote_average is None:
        return None
    score = math.floor(vote_average * 10 + 0.5)
    return max(0, min(100, score))


def year_from_date(date: str | None) -> int | None:
    """Year of a YYYY-MM-DD date, or None if it is missing or malformed."""
    head = (date or "")[:4]
    return int(head) if head.isdecimal() else None


class MetadataFallbackRepository:
    """Resolve and cache DetailRecords per catalog id."""

    def __init__(self, client: TMDBClient, resolver: MatchResolver) -> None:
        self.client = client
        self.resolver = resolver
        self._cache: ResolutionCache[DetailRecord] = ResolutionCache("details")

    def peek_details(self, entity_id: int) -> DetailRecord | None:
        return self._cache.peek(entity_id)

    async def get_details(
        self,
        entity_id: int,
        title: str,
        year_hint: int | None = None,
    ) -> DetailRecord | None:
        """Return fallback details for an id, resolving them if needed.

        Never raises. A miss is cached only when both the series and the
        film search completed without errors; a failed details request
        after a successful match leaves the id unresolved.
        """
        if entity_id in self._cache:
            return self._cache.peek(entity_id)

        display_title = title.strip()
        if not self.client.enabled or not display_title:
            self._cache.record_absent(entity_id)
            return None

        start_time = time.time()
        try:
            record, definitive = await self._resolve(display_title, year_hint)
        except AniArtError as e:
            log_operation_error(
                logger,
                e,
                operation="get_details",
                additional_context=ErrorContext(entity_id=entity_id),
                level=logging.WARNING,
            )
            return None
        except Exception:
            logger.exception("Unexpected error resolving details for id=%s", entity_id)
            return None

        if record is not None:
            self._cache.record(entity_id, record)
        elif definitive:
            self._cache.record_absent(entity_id)
        else:
            logger.debug("Details for id=%s left unresolved after search errors", entity_id)
            return None

        log_operation_success(
            logger,
            "get_details",
            (time.time() - start_time) * 1000,
            {"found": record is not None},
            ErrorContext(entity_id=entity_id),
        )
        return self._cache.peek(entity_id)

    async def _resolve(
        self, title: str, year_hint: int | None
    ) -> tuple[DetailRecord | None, bool]:
        """Return (record, definitive); details-request errors propagate."""
        queries = build_candidate_queries(title)

        series = await self.resolver.find_first_match(queries, year_hint, MatchKind.SERIES)
        if isinstance(series, MatchFound):
            details = await self.client.tv_details(series.item.id)
            return self._from_tv(details, title), True

        film = await self.resolver.find_first_match(queries, year_hint, MatchKind.FILM)
        if isinstance(film, MatchFound):
            movie = await self.client.movie_details(film.item.id)
            return self._from_movie(movie, title), True

        return None, series.is_definitive and film.is_definitive

    def _from_tv(self, details: TMDBTvDetails, fallback_title: str) -> DetailRecord:
        return DetailRecord(
            title=details.name if details.name and details.name.strip() else fallback_title,
            description=details.overview,
            banner_url=self.client.image_url(details.backdrop_path, ImageSize.ORIGINAL),
            cover_url=self.client.image_url(details.poster_path, ImageSize.W500),
            genres=tuple(genre.name for genre in details.genres),
            average_score=score_from_vote_average(details.vote_average),
            episodes=details.number_of_episodes,
            format="TV",
            status=details.status,
            season=None,
            season_year=year_from_date(details.first_air_date),
        )

    def _from_movie(self, details: TMDBMovieDetails, fallback_title: str) -> DetailRecord:
        return DetailRecord(
            title=details.title if details.title and details.title.strip() else fallback_title,
            description=details.overview,
            banner_url=self.client.image_url(details.backdrop_path, ImageSize.ORIGINAL),
            cover_url=self.client.image_url(details.poster_path, ImageSize.W500),
            genres=tuple(genre.name for genre in details.genres),
            average_score=score_from_vote_average(details.vote_average),
            episodes=None,
            format="MOVIE",
            status=details.status,
            season=None,
            season_year=year_from_date(details.release_date),
        )


__all__ = [
    "MetadataFallbackRepository",
    "score_from_vote_average",
    "year_from_date",
]
