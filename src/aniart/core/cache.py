"""Process-lifetime resolution cache.

Each entry is in one of three states: never looked at (UNRESOLVED),
resolved to a value, or confirmed to have no value. Writes are
insert-if-absent so the first definitive outcome for an id sticks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

logger = logging.getLogger(__name__)

V = TypeVar("V")


class EntryState(str, Enum):
    """Lookup state of the cache entry for one id."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    CONFIRMED_ABSENT = "confirmed_absent"


@dataclass(frozen=True)
class Resolved(Generic[V]):
    value: V


class _ConfirmedAbsent:
    """Marker stored for ids known to have no value."""

    _instance: _ConfirmedAbsent | None = None

    def __new__(cls) -> _ConfirmedAbsent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CONFIRMED_ABSENT"


CONFIRMED_ABSENT = _ConfirmedAbsent()

CacheEntry = Union[Resolved[V], _ConfirmedAbsent]


class ResolutionCache(Generic[V]):
    """Write-once, never-evicted map from entity id to a resolution outcome.

    Example:
        >>> cache: ResolutionCache[str] = ResolutionCache("backdrop")
        >>> cache.record(1, "https://image/a.jpg")
        True
        >>> cache.record(1, "https://image/b.jpg")
        False
        >>> cache.peek(1)
        'https://image/a.jpg'
        >>> cache.record_absent(2)
        True
        >>> cache.state(2)
        <EntryState.CONFIRMED_ABSENT: 'confirmed_absent'>
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[int, CacheEntry[V]] = {}

    def lookup(self, entity_id: int) -> CacheEntry[V] | None:
        """Return the raw entry, or None when the id is unresolved."""
        return self._entries.get(entity_id)

    def state(self, entity_id: int) -> EntryState:
        entry = self._entries.get(entity_id)
        if entry is None:
            return EntryState.UNRESOLVED
        if entry is CONFIRMED_ABSENT:
            return EntryState.CONFIRMED_ABSENT
        return EntryState.RESOLVED

    def peek(self, entity_id: int) -> V | None:
        """Return the resolved value; None when unresolved or confirmed absent."""
        entry = self._entries.get(entity_id)
        if isinstance(entry, Resolved):
            return entry.value
        return None

    def record(self, entity_id: int, value: V) -> bool:
        """Store a resolved value unless the id already has an entry.

        Returns:
            True if this call created the entry
        """
        return self._insert(entity_id, Resolved(value))

    def record_absent(self, entity_id: int) -> bool:
        """Store a confirmed absence unless the id already has an entry."""
        return self._insert(entity_id, CONFIRMED_ABSENT)

    def _insert(self, entity_id: int, entry: CacheEntry[V]) -> bool:
        stored = self._entries.setdefault(entity_id, entry)
        created = stored is entry
        if created:
            logger.debug("%s cache: id=%s -> %r", self.name, entity_id, entry)
        return created

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "CONFIRMED_ABSENT",
    "EntryState",
    "Resolved",
    "ResolutionCache",
]
