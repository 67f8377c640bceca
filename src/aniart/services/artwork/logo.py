"""Title logo repository.

Logos come from the matched series' image collection, ranked so that the
preferred language wins, then community votes, then resolution.
"""

from __future__ import annotations

from collections.abc import Sequence

from aniart.core.matching.resolver import MatchResolver
from aniart.services.artwork.base import ArtworkLookup, ArtworkRepository
from aniart.services.tmdb.client import TMDBClient
from aniart.shared.constants import ImageSize, TMDBConfig
from aniart.shared.models.tmdb import TMDBImage
from aniart.shared.result import Err, Ok, capture


def rank_logos(
    logos: Sequence[TMDBImage],
    preferred_language: str = TMDBConfig.DEFAULT_LOGO_LANGUAGE,
) -> list[TMDBImage]:
    """Order logos best first.

    Sort keys, all descending: preferred language, vote_average,
    vote_count, width.

    Example:
        >>> ranked = rank_logos([ja_logo, en_logo])
        >>> ranked[0].iso_639_1
        'en'
    """
    return sorted(
        logos,
        key=lambda logo: (
            logo.iso_639_1 == preferred_language,
            logo.vote_average,
            logo.vote_count,
            logo.width,
        ),
        reverse=True,
    )


class LogoRepository(ArtworkRepository):
    """w500 title-logo URL per catalog id."""

    artwork_kind = "logo"

    def __init__(
        self,
        client: TMDBClient,
        resolver: MatchResolver,
        preferred_language: str = TMDBConfig.DEFAULT_LOGO_LANGUAGE,
    ) -> None:
        super().__init__(client, resolver)
        self.preferred_language = preferred_language

    async def _lookup(
        self,
        entity_id: int,
        title: str,
        year_hint: int | None,
    ) -> ArtworkLookup:
        match = await self._match_series(title, year_hint)
        if isinstance(match, Err) or match.value is None:
            return match

        images = await capture(self.client.tv_images(match.value.id))
        if isinstance(images, Err):
            return images

        ranked = rank_logos(images.value.logos, self.preferred_language)
        if not ranked:
            return Ok(None)
        return Ok(self.client.image_url(ranked[0].file_path, ImageSize.W500))


__all__ = ["LogoRepository", "rank_logos"]
