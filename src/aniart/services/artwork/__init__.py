"""Artwork repositories: hero backdrops and title logos."""

from aniart.services.artwork.backdrop import BackdropRepository
from aniart.services.artwork.base import ArtworkRepository
from aniart.services.artwork.logo import LogoRepository, rank_logos

__all__ = [
    "ArtworkRepository",
    "BackdropRepository",
    "LogoRepository",
    "rank_logos",
]
