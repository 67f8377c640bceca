"""Explicit success/failure values for upstream calls.

Client calls raise ``AniArtError``; the matcher converts each call into an
``Ok`` or ``Err`` so that "the provider answered with nothing" and "the
provider could not be reached" stay distinguishable all the way to the
cache-write decision.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from aniart.shared.errors import AniArtError, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call carrying its value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed call carrying the error that caused it."""

    error: AniArtError

    @property
    def code(self) -> ErrorCode:
        return self.error.code


Result = Union[Ok[T], Err]


async def capture(call: Awaitable[T]) -> Result[T]:
    """Await ``call`` and wrap its outcome.

    Only ``AniArtError`` is captured; anything else is a programming error
    and propagates.
    """
    try:
        return Ok(await call)
    except AniArtError as e:
        return Err(e)
