"""Basic-info bookkeeping and the primary/fallback details flow.

Titles and years seen in feed pages are remembered per id so that, when
the primary catalog later fails to serve an entity's details, the TMDB
fallback still has something to search for.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Callable, Optional

from aniart.services.metadata_fallback import MetadataFallbackRepository
from aniart.shared.models.domain import AnimeEntity, BasicInfo, DetailRecord

logger = logging.getLogger(__name__)

PrimaryDetailsLoader = Callable[[int], Awaitable[Optional[DetailRecord]]]


class BasicInfoCache:
    """Remembered (title, year) per catalog id."""

    def __init__(self) -> None:
        self._entries: dict[int, BasicInfo] = {}

    def remember(self, entity_id: int, title: str, season_year: int | None = None) -> None:
        """Store basic info for an id.

        An existing entry is only replaced when it has no year and the new
        one does.
        """
        if not title.strip():
            return

        existing = self._entries.get(entity_id)
        if existing is None or (existing.season_year is None and season_year is not None):
            self._entries[entity_id] = BasicInfo(title=title, season_year=season_year)

    def remember_entities(self, entities: list[AnimeEntity]) -> None:
        for entity in entities:
            self.remember(entity.id, entity.title, entity.season_year)

    def get(self, entity_id: int) -> BasicInfo | None:
        return self._entries.get(entity_id)

    def __len__(self) -> int:
        return len(self._entries)


class DetailsService:
    """Load details from the primary catalog, falling back to TMDB."""

    def __init__(
        self,
        basic_info: BasicInfoCache,
        fallback: MetadataFallbackRepository,
    ) -> None:
        self.basic_info = basic_info
        self.fallback = fallback

    async def get_details(
        self,
        entity_id: int,
        primary: PrimaryDetailsLoader,
    ) -> DetailRecord | None:
        """Details for an id. Never raises.

        Args:
            entity_id: Catalog id
            primary: Coroutine function loading details from the primary catalog

        Returns:
            The primary record when available, else the fallback record, else None
        """
        try:
            record = await primary(entity_id)
        except Exception as e:
            logger.warning("Primary details for id=%s failed, using fallback: %s", entity_id, e)
            record = None

        if record is not None:
            self.basic_info.remember(entity_id, record.title, record.season_year)
            return record

        info = self.basic_info.get(entity_id)
        if info is None:
            logger.debug("No basic info remembered for id=%s; no fallback possible", entity_id)
            return None

        return await self.fallback.get_details(entity_id, info.title, info.season_year)


__all__ = ["BasicInfoCache", "DetailsService", "PrimaryDetailsLoader"]
