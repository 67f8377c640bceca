"""Matching Domain Models.

Immutable outcomes of a candidate-query match attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

ItemT = TypeVar("ItemT")


class MatchKind(str, Enum):
    """Which search endpoint a match runs against."""

    SERIES = "series"
    FILM = "film"


@dataclass(frozen=True)
class MatchFound(Generic[ItemT]):
    """First-ranked search item for the first query that returned results.

    Attributes:
        item: The matched search item
        query: Candidate query that produced it
        year: Year filter used for the successful search, if any
    """

    item: ItemT
    query: str
    year: int | None = None


@dataclass(frozen=True)
class MatchNotFound:
    """No candidate produced a result.

    Only ``had_transient_error=False`` is a confirmed miss that callers may
    cache; otherwise at least one search failed and the miss may be wrong.
    """

    had_transient_error: bool = False

    @property
    def is_definitive(self) -> bool:
        return not self.had_transient_error


MatchResult = Union[MatchFound[ItemT], MatchNotFound]

__all__ = ["MatchFound", "MatchKind", "MatchNotFound", "MatchResult"]
