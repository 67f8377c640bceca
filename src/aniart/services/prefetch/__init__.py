"""Artwork prefetch and image warm-up."""

from aniart.services.prefetch.orchestrator import PrefetchOrchestrator, WarmSummary
from aniart.services.prefetch.warmer import HttpImageWarmer, ImageWarmer

__all__ = [
    "HttpImageWarmer",
    "ImageWarmer",
    "PrefetchOrchestrator",
    "WarmSummary",
]
