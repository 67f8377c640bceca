"""Tests for the backdrop and logo repositories."""

from __future__ import annotations

import pytest
from factories import make_entity, make_logo, make_tv_item

from aniart.core.cache import EntryState
from aniart.core.matching.resolver import MatchResolver
from aniart.services.artwork import BackdropRepository, LogoRepository, rank_logos
from aniart.shared.errors import AniArtNetworkError, ErrorCode
from aniart.shared.models.tmdb import TMDBImagesResponse


def _network_error() -> AniArtNetworkError:
    return AniArtNetworkError(ErrorCode.TMDB_API_SERVER_ERROR, "HTTP 503")


@pytest.fixture
def backdrops(stub_client, resolver) -> BackdropRepository:
    return BackdropRepository(stub_client, resolver)


@pytest.fixture
def logos(stub_client, resolver) -> LogoRepository:
    return LogoRepository(stub_client, resolver)


class TestBackdropRepository:
    @pytest.mark.asyncio
    async def test_resolves_original_size_backdrop(self, backdrops, stub_client):
        stub_client.search_tv.return_value = [make_tv_item(backdrop_path="/bd.jpg")]

        url = await backdrops.resolve(1, "Attack on Titan", 2013)

        assert url == "https://image.tmdb.org/t/p/original/bd.jpg"
        assert backdrops.peek(1) == url
        assert backdrops.state(1) is EntryState.RESOLVED

    @pytest.mark.asyncio
    async def test_resolve_is_cached(self, backdrops, stub_client):
        stub_client.search_tv.return_value = [make_tv_item()]

        first = await backdrops.resolve(1, "Attack on Titan", 2013)
        second = await backdrops.resolve(1, "Attack on Titan", 2013)

        assert first == second
        assert stub_client.search_tv.await_count == 1

    @pytest.mark.asyncio
    async def test_confirmed_miss_is_cached(self, backdrops, stub_client):
        # Given: every search answers with no results
        # When
        assert await backdrops.resolve(2, "Unknown Show", 2020) is None
        calls = stub_client.search_tv.await_count
        assert await backdrops.resolve(2, "Unknown Show", 2020) is None

        # Then: the negative is definitive and never searched again
        assert backdrops.state(2) is EntryState.CONFIRMED_ABSENT
        assert stub_client.search_tv.await_count == calls

    @pytest.mark.asyncio
    async def test_match_without_backdrop_is_absent(self, backdrops, stub_client):
        stub_client.search_tv.return_value = [make_tv_item(backdrop_path=None)]

        assert await backdrops.resolve(3, "Attack on Titan") is None
        assert backdrops.state(3) is EntryState.CONFIRMED_ABSENT

    @pytest.mark.asyncio
    async def test_transient_failure_is_not_cached(self, backdrops, stub_client):
        # Given: the provider is down
        stub_client.search_tv.side_effect = _network_error()

        # When
        assert await backdrops.resolve(4, "Frieren", 2023) is None

        # Then: the id stays unresolved and a later call retries
        assert backdrops.state(4) is EntryState.UNRESOLVED
        stub_client.search_tv.side_effect = None
        stub_client.search_tv.return_value = [make_tv_item(backdrop_path="/later.jpg")]
        assert await backdrops.resolve(4, "Frieren", 2023) == (
            "https://image.tmdb.org/t/p/original/later.jpg"
        )

    @pytest.mark.asyncio
    async def test_unexpected_error_is_swallowed(self, backdrops, stub_client):
        stub_client.search_tv.side_effect = RuntimeError("bug")

        assert await backdrops.resolve(5, "Frieren") is None
        assert backdrops.state(5) is EntryState.UNRESOLVED

    @pytest.mark.asyncio
    async def test_blank_title_is_definitive_negative(self, backdrops, stub_client):
        assert await backdrops.resolve(6, "   ") is None

        assert backdrops.state(6) is EntryState.CONFIRMED_ABSENT
        stub_client.search_tv.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled_client_is_definitive_negative(self, disabled_client):
        repository = BackdropRepository(disabled_client, MatchResolver(disabled_client))

        assert await repository.resolve(7, "Frieren", 2023) is None

        assert repository.state(7) is EntryState.CONFIRMED_ABSENT
        disabled_client.search_tv.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_prefetch_skips_cached_and_duplicate_ids(self, backdrops, stub_client):
        # Given: id 1 is already resolved
        stub_client.search_tv.return_value = [make_tv_item(backdrop_path="/one.jpg")]
        await backdrops.resolve(1, "Frieren")
        stub_client.search_tv.reset_mock()
        stub_client.search_tv.return_value = []

        # When
        await backdrops.prefetch([make_entity(1), make_entity(2), make_entity(2)])

        # Then: only id 2 was searched, with and without its year
        assert stub_client.search_tv.await_count == 2
        assert backdrops.peek(1) == "https://image.tmdb.org/t/p/original/one.jpg"
        assert backdrops.state(2) is EntryState.CONFIRMED_ABSENT


class TestRankLogos:
    def test_preferred_language_first(self):
        ja = make_logo("/ja.png", language="ja", vote_average=9.0, vote_count=50)
        en = make_logo("/en.png", language="en", vote_average=1.0)

        assert [logo.file_path for logo in rank_logos([ja, en])] == ["/en.png", "/ja.png"]

    def test_votes_then_width_break_ties(self):
        low = make_logo("/low.png", vote_average=4.0)
        high = make_logo("/high.png", vote_average=6.0)
        popular = make_logo("/popular.png", vote_average=6.0, vote_count=10)
        wide = make_logo("/wide.png", vote_average=6.0, vote_count=10, width=2000)

        ranked = rank_logos([low, high, popular, wide])

        assert [logo.file_path for logo in ranked] == [
            "/wide.png",
            "/popular.png",
            "/high.png",
            "/low.png",
        ]

    def test_language_neutral_logos_rank_after_preferred(self):
        neutral = make_logo("/neutral.png", language=None, vote_average=10.0)
        english = make_logo("/en.png", language="en", vote_average=0.0)

        assert rank_logos([neutral, english], "en")[0].file_path == "/en.png"


class TestLogoRepository:
    @pytest.mark.asyncio
    async def test_resolves_best_logo(self, logos, stub_client):
        stub_client.search_tv.return_value = [make_tv_item(item_id=209867)]
        stub_client.tv_images.return_value = TMDBImagesResponse(
            id=209867,
            logos=[
                make_logo("/ja.png", language="ja", vote_average=8.0),
                make_logo("/en.png", language="en", vote_average=3.0),
            ],
        )

        url = await logos.resolve(10, "Frieren", 2023)

        assert url == "https://image.tmdb.org/t/p/w500/en.png"
        stub_client.tv_images.assert_awaited_once_with(209867)

    @pytest.mark.asyncio
    async def test_no_logos_is_absent(self, logos, stub_client):
        stub_client.search_tv.return_value = [make_tv_item()]
        stub_client.tv_images.return_value = TMDBImagesResponse(logos=[])

        assert await logos.resolve(11, "Frieren") is None
        assert logos.state(11) is EntryState.CONFIRMED_ABSENT

    @pytest.mark.asyncio
    async def test_images_failure_is_not_cached(self, logos, stub_client):
        stub_client.search_tv.return_value = [make_tv_item()]
        stub_client.tv_images.side_effect = _network_error()

        assert await logos.resolve(12, "Frieren") is None
        assert logos.state(12) is EntryState.UNRESOLVED

    @pytest.mark.asyncio
    async def test_search_failure_is_not_cached(self, logos, stub_client):
        stub_client.search_tv.side_effect = _network_error()

        assert await logos.resolve(13, "Frieren", 2023) is None
        assert logos.state(13) is EntryState.UNRESOLVED
        stub_client.tv_images.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_caches_are_independent(self, logos, backdrops, stub_client):
        stub_client.search_tv.return_value = [make_tv_item()]
        stub_client.tv_images.return_value = TMDBImagesResponse(logos=[])

        await logos.resolve(14, "Frieren")

        assert logos.state(14) is EntryState.CONFIRMED_ABSENT
        assert backdrops.state(14) is EntryState.UNRESOLVED
