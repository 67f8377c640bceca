"""Sequential candidate-query matching.

For each candidate query the resolver searches with the year hint first
and, only when that returns nothing, without it. The first non-empty
result wins. Every search is captured as ``Ok``/``Err`` so that a miss
caused by upstream failures is never mistaken for a confirmed miss.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Sequence
from typing import Any, Callable, Protocol

from aniart.core.matching.candidates import build_candidate_queries
from aniart.core.matching.models import MatchFound, MatchKind, MatchNotFound, MatchResult
from aniart.shared.logging import log_operation_error
from aniart.shared.models.tmdb import TMDBMovieSearchItem, TMDBTvSearchItem
from aniart.shared.result import Err, Ok, capture

logger = logging.getLogger(__name__)


class SearchClient(Protocol):
    """The part of the TMDB client the resolver needs."""

    async def search_tv(self, query: str, year: int | None = None) -> list[TMDBTvSearchItem]: ...

    async def search_movie(
        self, query: str, year: int | None = None
    ) -> list[TMDBMovieSearchItem]: ...


class MatchResolver:
    """Find the first search hit for an ordered list of candidate queries."""

    def __init__(self, client: SearchClient) -> None:
        self.client = client

    def _search_function(self, kind: MatchKind) -> Callable[[str, int | None], Awaitable[list[Any]]]:
        if kind is MatchKind.SERIES:
            return self.client.search_tv
        return self.client.search_movie

    async def find_first_match(
        self,
        candidates: Sequence[str],
        year_hint: int | None,
        kind: MatchKind = MatchKind.SERIES,
    ) -> MatchResult[Any]:
        """Try candidates in order against the search endpoint for ``kind``.

        Args:
            candidates: Ordered candidate queries, most specific first
            year_hint: Optional year; tried before the unfiltered search
            kind: SERIES searches TV, FILM searches movies

        Returns:
            MatchFound for the first non-empty result, otherwise
            MatchNotFound flagged with whether any search failed
        """
        search = self._search_function(kind)
        had_transient_error = False

        for query in candidates:
            years = (year_hint, None) if year_hint is not None else (None,)
            for year in years:
                outcome = await capture(search(query, year))
                if isinstance(outcome, Err):
                    had_transient_error = True
                    log_operation_error(
                        logger,
                        outcome.error,
                        operation=f"search_{kind.value}",
                        additional_context={"query": query, "year": year},
                        level=logging.WARNING,
                    )
                    continue
                if isinstance(outcome, Ok) and outcome.value:
                    logger.debug("Matched %r (year=%s) for %s search", query, year, kind.value)
                    return MatchFound(item=outcome.value[0], query=query, year=year)

        return MatchNotFound(had_transient_error=had_transient_error)

    async def find_series_match(
        self, title: str, year_hint: int | None = None
    ) -> MatchResult[TMDBTvSearchItem]:
        """Build candidates from a display title and match against TV search."""
        return await self.find_first_match(build_candidate_queries(title), year_hint, MatchKind.SERIES)

    async def find_film_match(
        self, title: str, year_hint: int | None = None
    ) -> MatchResult[TMDBMovieSearchItem]:
        """Build candidates from a display title and match against movie search."""
        return await self.find_first_match(build_candidate_queries(title), year_hint, MatchKind.FILM)


__all__ = ["MatchResolver", "SearchClient"]
