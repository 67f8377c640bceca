"""Title matching against the secondary metadata provider."""

from aniart.core.matching.candidates import build_candidate_queries
from aniart.core.matching.models import MatchFound, MatchKind, MatchNotFound, MatchResult
from aniart.core.matching.resolver import MatchResolver

__all__ = [
    "MatchFound",
    "MatchKind",
    "MatchNotFound",
    "MatchResolver",
    "MatchResult",
    "build_candidate_queries",
]
