"""Dependency Injection container for AniArt.

This module is the composition root: it wires settings, the shared HTTP
session, the TMDB client, the matcher, the repositories and the prefetch
orchestrator. One container holds one set of caches, so a container per
process run gives process-lifetime caching without global state.
"""

from __future__ import annotations

from dependency_injector import containers, providers

from aniart.config.loader import load_settings
from aniart.core.matching.resolver import MatchResolver
from aniart.services.artwork.backdrop import BackdropRepository
from aniart.services.artwork.logo import LogoRepository
from aniart.services.basic_info import BasicInfoCache, DetailsService
from aniart.services.metadata_fallback import MetadataFallbackRepository
from aniart.services.prefetch.orchestrator import PrefetchOrchestrator
from aniart.services.prefetch.warmer import HttpImageWarmer
from aniart.services.tmdb.client import TMDBClient
from aniart.services.tmdb.session import HttpSessionManager


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for AniArt services.

    Example:
        >>> container = Container()
        >>> backdrops = container.backdrop_repository()
        >>> url = await backdrops.resolve(21, "One Piece", 1999)
    """

    # Configuration
    config = providers.Singleton(load_settings)

    tmdb_settings = providers.Callable(lambda config: config.api.tmdb, config=config)

    # Shared HTTP session
    session_manager = providers.Singleton(
        HttpSessionManager,
        timeout=providers.Callable(lambda tmdb: tmdb.timeout, tmdb=tmdb_settings),
    )

    # TMDB client and matcher
    tmdb_client = providers.Singleton(
        TMDBClient,
        settings=tmdb_settings,
        session_manager=session_manager,
    )

    match_resolver = providers.Singleton(MatchResolver, client=tmdb_client)

    # Repositories (each owns its cache)
    backdrop_repository = providers.Singleton(
        BackdropRepository,
        client=tmdb_client,
        resolver=match_resolver,
    )

    logo_repository = providers.Singleton(
        LogoRepository,
        client=tmdb_client,
        resolver=match_resolver,
        preferred_language=providers.Callable(lambda tmdb: tmdb.logo_language, tmdb=tmdb_settings),
    )

    metadata_fallback = providers.Singleton(
        MetadataFallbackRepository,
        client=tmdb_client,
        resolver=match_resolver,
    )

    basic_info_cache = providers.Singleton(BasicInfoCache)

    details_service = providers.Singleton(
        DetailsService,
        basic_info=basic_info_cache,
        fallback=metadata_fallback,
    )

    # Prefetch
    image_warmer = providers.Singleton(HttpImageWarmer, session_manager=session_manager)

    prefetch_orchestrator = providers.Singleton(
        PrefetchOrchestrator,
        backdrops=backdrop_repository,
        logos=logo_repository,
        warmer=image_warmer,
        settings=providers.Callable(lambda config: config.prefetch, config=config),
    )
