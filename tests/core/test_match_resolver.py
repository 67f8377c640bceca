"""Tests for MatchResolver ordering and transient-error tracking."""

from __future__ import annotations

from unittest.mock import call

import pytest
from factories import make_tv_item

from aniart.core.matching.models import MatchFound, MatchKind, MatchNotFound
from aniart.shared.errors import AniArtNetworkError, ErrorCode
from aniart.shared.models.tmdb import TMDBMovieSearchItem


def _network_error() -> AniArtNetworkError:
    return AniArtNetworkError(ErrorCode.TMDB_API_CONNECTION_ERROR, "connection refused")


class TestFindFirstMatch:
    @pytest.mark.asyncio
    async def test_empty_candidates_is_confirmed_miss(self, resolver, stub_client):
        result = await resolver.find_first_match([], 2020)

        assert result == MatchNotFound(had_transient_error=False)
        stub_client.search_tv.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_year_then_no_year_per_candidate(self, resolver, stub_client):
        # Given: nothing matches anywhere
        # When
        result = await resolver.find_first_match(["First", "Second"], 2019)

        # Then: interleaved ordering, confirmed miss
        assert stub_client.search_tv.await_args_list == [
            call("First", 2019),
            call("First", None),
            call("Second", 2019),
            call("Second", None),
        ]
        assert isinstance(result, MatchNotFound)
        assert result.is_definitive

    @pytest.mark.asyncio
    async def test_without_year_hint_searches_once_per_candidate(self, resolver, stub_client):
        await resolver.find_first_match(["First", "Second"], None)

        assert stub_client.search_tv.await_args_list == [call("First", None), call("Second", None)]

    @pytest.mark.asyncio
    async def test_first_non_empty_result_wins(self, resolver, stub_client):
        # Given: year-filtered search is empty, unfiltered returns two items
        hit = make_tv_item(item_id=10)
        other = make_tv_item(item_id=11)
        stub_client.search_tv.side_effect = [[], [hit, other]]

        # When
        result = await resolver.find_first_match(["Query", "Later"], 2013)

        # Then
        assert result == MatchFound(item=hit, query="Query", year=None)
        assert stub_client.search_tv.await_count == 2

    @pytest.mark.asyncio
    async def test_all_searches_failing_is_transient(self, resolver, stub_client):
        stub_client.search_tv.side_effect = _network_error()

        result = await resolver.find_first_match(["A title", "Another"], 2020)

        assert result == MatchNotFound(had_transient_error=True)
        assert not result.is_definitive
        # Errors do not stop the walk through candidates
        assert stub_client.search_tv.await_count == 4

    @pytest.mark.asyncio
    async def test_error_then_success_still_matches(self, resolver, stub_client):
        hit = make_tv_item(item_id=5)
        stub_client.search_tv.side_effect = [_network_error(), [hit]]

        result = await resolver.find_first_match(["Title"], 2020)

        assert isinstance(result, MatchFound)
        assert result.item.id == 5

    @pytest.mark.asyncio
    async def test_partial_error_then_miss_is_transient(self, resolver, stub_client):
        stub_client.search_tv.side_effect = [[], _network_error(), [], []]

        result = await resolver.find_first_match(["One", "Two"], 2020)

        assert result == MatchNotFound(had_transient_error=True)

    @pytest.mark.asyncio
    async def test_non_aniart_errors_propagate(self, resolver, stub_client):
        stub_client.search_tv.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            await resolver.find_first_match(["Title"], None)

    @pytest.mark.asyncio
    async def test_film_kind_uses_movie_search(self, resolver, stub_client):
        film = TMDBMovieSearchItem(id=77, title="Suzume", release_date="2022-11-11")
        stub_client.search_movie.return_value = [film]

        result = await resolver.find_first_match(["Suzume"], 2022, MatchKind.FILM)

        assert result == MatchFound(item=film, query="Suzume", year=2022)
        stub_client.search_tv.assert_not_awaited()


class TestTitleHelpers:
    @pytest.mark.asyncio
    async def test_find_series_match_builds_candidates(self, resolver, stub_client):
        await resolver.find_series_match("Attack on Titan Final Season", None)

        queries = [args.args[0] for args in stub_client.search_tv.await_args_list]
        assert queries == ["Attack on Titan Final Season", "Attack on Titan"]

    @pytest.mark.asyncio
    async def test_find_film_match_blank_title(self, resolver, stub_client):
        result = await resolver.find_film_match("   ")

        assert result == MatchNotFound(had_transient_error=False)
        stub_client.search_movie.assert_not_awaited()
