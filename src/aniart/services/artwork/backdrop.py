"""Hero backdrop repository.

The backdrop is the full-resolution ``backdrop_path`` of the first TV
search hit for the entity's title.
"""

from __future__ import annotations

from aniart.services.artwork.base import ArtworkLookup, ArtworkRepository
from aniart.shared.constants import ImageSize
from aniart.shared.result import Err, Ok


class BackdropRepository(ArtworkRepository):
    """Original-size backdrop URL per catalog id."""

    artwork_kind = "backdrop"

    async def _lookup(
        self,
        entity_id: int,
        title: str,
        year_hint: int | None,
    ) -> ArtworkLookup:
        match = await self._match_series(title, year_hint)
        if isinstance(match, Err) or match.value is None:
            return match
        return Ok(self.client.image_url(match.value.backdrop_path, ImageSize.ORIGINAL))


__all__ = ["BackdropRepository"]
