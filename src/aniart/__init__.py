"""
AniArt - Artwork and metadata enrichment for anime catalogs

Resolves backdrops, title logos and fallback details for catalog entries
from TMDB, caches the outcomes for the lifetime of the process, and warms
image URLs ahead of display.
"""

__version__ = "0.1.0"
__author__ = "AniArt Team"

__all__ = ["__version__"]
