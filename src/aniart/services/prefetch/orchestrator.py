"""Prefetch orchestration.

Resolves backdrop and logo URLs for a working set of catalog entities and
warms the resulting images (plus leading poster rows) before they are
displayed. Resolution is time-boxed; warm-up is capped by job count and
gated by a semaphore. Nothing here raises to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from aniart.config.models.prefetch_settings import PrefetchSettings
from aniart.services.artwork.backdrop import BackdropRepository
from aniart.services.artwork.logo import LogoRepository
from aniart.services.prefetch.warmer import ImageWarmer
from aniart.shared.logging import log_operation_start, log_operation_success
from aniart.shared.models.domain import AnimeEntity, HomeFeed, PreloadJob, PreloadSizes

logger = logging.getLogger(__name__)


@dataclass
class WarmSummary:
    """Outcome counts of one warm-up batch.

    Attributes:
        attempted: Jobs handed to the warmer (after the cap and blank-URL skip)
        succeeded: Jobs whose warmer call completed
        failed: Jobs whose warmer call raised
        dropped: Jobs beyond the max_jobs cap
    """

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    dropped: int = 0


def _distinct_urls(urls: Iterable[str | None]) -> list[str]:
    seen: list[str] = []
    for url in urls:
        if url and url.strip() and url not in seen:
            seen.append(url)
    return seen


def _distinct_entities(entities: Iterable[AnimeEntity]) -> list[AnimeEntity]:
    by_id: dict[int, AnimeEntity] = {}
    for entity in entities:
        by_id.setdefault(entity.id, entity)
    return list(by_id.values())


class PrefetchOrchestrator:
    """Resolve artwork for a working set and warm the images."""

    def __init__(
        self,
        backdrops: BackdropRepository,
        logos: LogoRepository,
        warmer: ImageWarmer,
        settings: PrefetchSettings | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            backdrops: Backdrop repository (owns the backdrop cache)
            logos: Logo repository (owns the logo cache)
            warmer: Fetches a single image job
            settings: Job cap, concurrency and timeout defaults

        Raises:
            ValueError: If concurrency is less than 1
        """
        self.backdrops = backdrops
        self.logos = logos
        self.warmer = warmer
        self.settings = settings or PrefetchSettings()

        if self.settings.concurrency < 1:
            msg = f"concurrency must be at least 1, got {self.settings.concurrency}"
            raise ValueError(msg)

    def default_sizes(self, hero: tuple[int, int], poster: tuple[int, int]) -> PreloadSizes:
        """PreloadSizes for display-dependent hero/poster sizes and the configured logo size."""
        return PreloadSizes(
            hero_width=hero[0],
            hero_height=hero[1],
            poster_width=poster[0],
            poster_height=poster[1],
            logo_width=self.settings.logo_width,
            logo_height=self.settings.logo_height,
        )

    async def warm(self, jobs: Sequence[PreloadJob]) -> WarmSummary:
        """Warm at most max_jobs jobs with bounded concurrency.

        Jobs with a blank URL are skipped; failures are logged at debug
        level and counted.
        """
        selected = list(jobs[: self.settings.max_jobs])
        summary = WarmSummary(dropped=max(len(jobs) - len(selected), 0))
        if not selected:
            return summary

        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def warm_one(job: PreloadJob) -> bool | None:
            if not job.url.strip():
                return None
            async with semaphore:
                try:
                    await self.warmer.warm(job)
                except Exception as e:
                    logger.debug("Warm-up failed for %s: %s", job.url, e)
                    return False
                return True

        results = await asyncio.gather(
            *(warm_one(job) for job in selected),
            return_exceptions=True,
        )
        for result in results:
            if result is None:
                continue
            summary.attempted += 1
            if result is True:
                summary.succeeded += 1
            else:
                summary.failed += 1

        logger.debug(
            "Warm-up finished: %d ok, %d failed, %d dropped",
            summary.succeeded,
            summary.failed,
            summary.dropped,
        )
        return summary

    async def resolve_artwork(
        self,
        entities: Sequence[AnimeEntity],
        timeout: float | None = None,
    ) -> None:
        """Resolve backdrop and logo for every entity concurrently.

        When ``timeout`` elapses, lookups still in flight are cancelled;
        whatever completed is already in the repositories' caches.
        """
        if not entities:
            return

        tasks = [
            asyncio.ensure_future(repository.resolve(entity.id, entity.title, entity.season_year))
            for entity in entities
            for repository in (self.backdrops, self.logos)
        ]
        try:
            _, pending = await asyncio.wait(tasks, timeout=timeout)
        finally:
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        if pending:
            logger.info(
                "Artwork resolution hit the %.1fs budget; %d of %d lookups cancelled",
                timeout,
                len(pending),
                len(tasks),
            )

    def hero_jobs(self, entities: Sequence[AnimeEntity], sizes: PreloadSizes) -> list[PreloadJob]:
        """Backdrop (or feed banner/cover) jobs at hero size, then logo jobs."""
        backdrop_urls = _distinct_urls(
            self.backdrops.peek(entity.id) or entity.banner_url or entity.cover_url
            for entity in entities
        )
        logo_urls = _distinct_urls(self.logos.peek(entity.id) for entity in entities)

        jobs = [PreloadJob(url, sizes.hero_width, sizes.hero_height) for url in backdrop_urls]
        jobs.extend(PreloadJob(url, sizes.logo_width, sizes.logo_height) for url in logo_urls)
        return jobs

    async def preload_working_set(
        self,
        entities: Sequence[AnimeEntity],
        sizes: PreloadSizes,
        timeout: float | None = None,
    ) -> WarmSummary:
        """Resolve artwork for ``entities`` (time-boxed) and warm it.

        Args:
            entities: Working set; duplicates by id are ignored
            sizes: Target pixel sizes
            timeout: Resolution budget in seconds; None means unbounded
        """
        working_set = _distinct_entities(entities)
        start_time = time.time()
        log_operation_start(logger, "preload_working_set", {"entities": len(working_set)})

        await self.resolve_artwork(working_set, timeout)
        summary = await self.warm(self.hero_jobs(working_set, sizes))

        log_operation_success(
            logger,
            "preload_working_set",
            (time.time() - start_time) * 1000,
            {"warmed": summary.succeeded, "failed": summary.failed},
        )
        return summary

    async def preload_home(
        self,
        feed: HomeFeed,
        sizes: PreloadSizes,
        timeout: float | None = None,
    ) -> WarmSummary:
        """Warm hero artwork plus the leading covers of each home row.

        Args:
            feed: Home rows
            sizes: Target pixel sizes
            timeout: Resolution budget; defaults to the configured startup timeout
        """
        heroes = _distinct_entities(feed.heroes)
        budget = self.settings.startup_timeout if timeout is None else timeout
        start_time = time.time()
        log_operation_start(logger, "preload_home", {"heroes": len(heroes)})

        await self.resolve_artwork(heroes, budget)

        take = self.settings.home_row_take
        poster_urls = _distinct_urls(
            entity.cover_url for row in feed.rows for entity in row[:take]
        )
        jobs = self.hero_jobs(heroes, sizes)
        jobs.extend(PreloadJob(url, sizes.poster_width, sizes.poster_height) for url in poster_urls)
        summary = await self.warm(jobs)

        log_operation_success(
            logger,
            "preload_home",
            (time.time() - start_time) * 1000,
            {"warmed": summary.succeeded, "failed": summary.failed, "dropped": summary.dropped},
        )
        return summary

    async def preload_neighborhood(
        self,
        entities: Sequence[AnimeEntity],
        indices: Iterable[int],
        sizes: PreloadSizes,
    ) -> WarmSummary:
        """Warm the entities at ``indices`` (e.g. current and adjacent heroes).

        Out-of-range indices are ignored.
        """
        chosen = [entities[i] for i in indices if 0 <= i < len(entities)]
        if not chosen:
            return WarmSummary()
        return await self.preload_working_set(chosen, sizes)

    def collect_warmup_urls(self, feed: HomeFeed) -> list[str]:
        """URLs worth fetching early, from cache and feed data only.

        Hero banners and covers, cached backdrops and logos, then the
        leading covers of each row.
        """
        heroes = feed.heroes
        take = self.settings.warmup_row_take
        return _distinct_urls(
            [
                *(hero.banner_url for hero in heroes),
                *(hero.cover_url for hero in heroes),
                *(self.backdrops.peek(hero.id) for hero in heroes),
                *(self.logos.peek(hero.id) for hero in heroes),
                *(entity.cover_url for row in feed.rows for entity in row[:take]),
            ]
        )


__all__ = ["PrefetchOrchestrator", "WarmSummary"]
