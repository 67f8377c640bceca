"""
Pytest configuration and shared fixtures for AniArt tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from aniart.config.models.api_settings import TMDBSettings
from aniart.core.matching.resolver import MatchResolver
from aniart.services.tmdb.client import TMDBClient
from aniart.services.tmdb.session import HttpSessionManager
from aniart.shared.models.domain import PreloadSizes

TEST_API_KEY = "test_api_key_for_ci_testing_only"  # pragma: allowlist secret


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep host configuration out of tests."""
    for name in ("TMDB_API_KEY", "ANIART_API__TMDB__API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmdb_settings() -> TMDBSettings:
    """TMDB settings with an API key and no retries."""
    return TMDBSettings(api_key=TEST_API_KEY, retry_attempts=0, retry_delay=0)


@pytest.fixture
def tmdb_client(tmdb_settings: TMDBSettings) -> TMDBClient:
    """A real client; tests patch its request methods."""
    return TMDBClient(tmdb_settings, HttpSessionManager())


@pytest.fixture
def stub_client(mocker, tmdb_client: TMDBClient) -> TMDBClient:
    """Client whose endpoint calls are AsyncMocks returning empty results.

    image_url stays real so URL building is exercised.
    """
    mocker.patch.object(tmdb_client, "search_tv", new_callable=AsyncMock, return_value=[])
    mocker.patch.object(tmdb_client, "search_movie", new_callable=AsyncMock, return_value=[])
    mocker.patch.object(tmdb_client, "tv_images", new_callable=AsyncMock)
    mocker.patch.object(tmdb_client, "tv_details", new_callable=AsyncMock)
    mocker.patch.object(tmdb_client, "movie_details", new_callable=AsyncMock)
    return tmdb_client


@pytest.fixture
def disabled_client(mocker) -> TMDBClient:
    """Client without an API key; endpoint calls are spies."""
    client = TMDBClient(TMDBSettings(api_key=""), HttpSessionManager())
    mocker.patch.object(client, "search_tv", new_callable=AsyncMock, return_value=[])
    mocker.patch.object(client, "search_movie", new_callable=AsyncMock, return_value=[])
    return client


@pytest.fixture
def resolver(stub_client: TMDBClient) -> MatchResolver:
    return MatchResolver(stub_client)


@pytest.fixture
def preload_sizes() -> PreloadSizes:
    return PreloadSizes(hero_width=1920, hero_height=756, poster_width=260, poster_height=390)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
