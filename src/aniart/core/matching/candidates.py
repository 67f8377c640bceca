"""Search query candidates for fuzzy title matching.

Display titles often carry season/part/cour qualifiers or subtitles that the
metadata provider does not store, so a title is expanded into a short,
ordered list of progressively looser queries.
"""

from __future__ import annotations

import re

# Trailing qualifier such as "Final Season", "Season 2", "(S2)", "[Part 3]", "Cour 2"
SEASON_SUFFIX_PATTERN = re.compile(
    r"\s*(?:\(|\[)?\s*"
    r"(final\s*season|the\s*final\s*season|season\s*\d+|s\d+|part\s*\d+|cour\s*\d+)"
    r"\s*(?:\)|\])?\s*$",
    re.IGNORECASE,
)

WHITESPACE_PATTERN = re.compile(r"\s+")

# Tried in order; the first one present in the title is used
SUBTITLE_SEPARATORS: tuple[str, ...] = (" - ", " – ", "-", "–")

MIN_QUERY_LENGTH = 3


def normalize_query(text: str) -> str:
    """Map "×" to "x", collapse whitespace runs and trim."""
    return WHITESPACE_PATTERN.sub(" ", text.replace("×", "x")).strip()


def strip_season_suffix(title: str) -> str:
    """Remove a trailing season/part/cour qualifier.

    Examples:
        >>> strip_season_suffix("My Hero Academia FINAL SEASON")
        'My Hero Academia'
        >>> strip_season_suffix("Spy x Family (Season 2)")
        'Spy x Family'
    """
    return SEASON_SUFFIX_PATTERN.sub("", title)


def _before_separators(title: str) -> str:
    for separator in SUBTITLE_SEPARATORS:
        if separator in title:
            return title.split(separator, 1)[0]
    return title


def build_candidate_queries(title: str) -> list[str]:
    """Build ordered search queries for a display title.

    Variants, most specific first:
        1. the normalized title
        2. the title without a trailing season qualifier
        3. the text before the first ":"
        4. the text before the first dash-like separator

    Variants shorter than three characters are dropped and duplicates are
    removed keeping the first occurrence.

    Examples:
        >>> build_candidate_queries("Attack on Titan Final Season")
        ['Attack on Titan Final Season', 'Attack on Titan']
        >>> build_candidate_queries("Oregairu: My Teen Romantic Comedy")
        ['Oregairu: My Teen Romantic Comedy', 'Oregairu']
        >>> build_candidate_queries("   ")
        []

    Args:
        title: Display title from the catalog feed

    Returns:
        De-duplicated candidate queries; empty for a blank title
    """
    raw = title.strip()
    if not raw:
        return []

    variants = (
        normalize_query(raw),
        normalize_query(strip_season_suffix(raw)),
        normalize_query(raw.split(":", 1)[0]),
        normalize_query(_before_separators(raw)),
    )

    candidates: list[str] = []
    for variant in variants:
        if len(variant) >= MIN_QUERY_LENGTH and variant not in candidates:
            candidates.append(variant)
    return candidates


__all__ = [
    "build_candidate_queries",
    "normalize_query",
    "strip_season_suffix",
]
