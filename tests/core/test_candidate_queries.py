"""Tests for search-candidate generation."""

from __future__ import annotations

import pytest

from aniart.core.matching.candidates import (
    build_candidate_queries,
    normalize_query,
    strip_season_suffix,
)


class TestNormalizeQuery:
    def test_collapses_whitespace_and_trims(self):
        assert normalize_query("  Spy   x\tFamily  ") == "Spy x Family"

    def test_maps_multiplication_sign(self):
        assert normalize_query("Hunter×Hunter") == "HunterxHunter"


class TestStripSeasonSuffix:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Attack on Titan Final Season", "Attack on Titan"),
            ("Attack on Titan The Final Season", "Attack on Titan"),
            ("My Hero Academia FINAL SEASON", "My Hero Academia"),
            ("Mob Psycho 100 Season 3", "Mob Psycho 100"),
            ("Oshi no Ko S2", "Oshi no Ko"),
            ("Jujutsu Kaisen (Part 2)", "Jujutsu Kaisen"),
            ("Dr. Stone [Cour 2]", "Dr. Stone"),
        ],
    )
    def test_removes_trailing_qualifier(self, title, expected):
        assert strip_season_suffix(title).strip() == expected

    def test_qualifier_must_be_at_end(self):
        title = "Season 2 Recap Special"
        assert strip_season_suffix(title) == title


class TestBuildCandidateQueries:
    def test_blank_title_yields_nothing(self):
        assert build_candidate_queries("") == []
        assert build_candidate_queries("   ") == []

    def test_final_season_title(self):
        # Given / When
        candidates = build_candidate_queries("Attack on Titan Final Season")

        # Then: full title first, stripped title second
        assert candidates[:2] == ["Attack on Titan Final Season", "Attack on Titan"]

    def test_colon_subtitle(self):
        candidates = build_candidate_queries("Oregairu: My Teen Romantic Comedy")

        assert candidates[0] == "Oregairu: My Teen Romantic Comedy"
        assert "Oregairu" in candidates

    def test_dash_subtitle(self):
        candidates = build_candidate_queries("Re:Zero - Starting Life in Another World")

        # "Re" (before the colon) is too short and dropped
        assert candidates == [
            "Re:Zero - Starting Life in Another World",
            "Re:Zero",
        ]

    def test_short_variants_dropped(self):
        # "Re" (before the colon) is shorter than three characters
        candidates = build_candidate_queries("Re:Zero")

        assert candidates == ["Re:Zero"]

    def test_no_duplicates_and_order_kept(self):
        candidates = build_candidate_queries("Frieren")

        assert candidates == ["Frieren"]

    def test_every_candidate_is_normalized_and_long_enough(self):
        candidates = build_candidate_queries("  Kaguya-sama:   Love  is War  Season 2 ")

        assert candidates
        for candidate in candidates:
            assert len(candidate) >= 3
            assert candidate == candidate.strip()
            assert "  " not in candidate
        assert len(candidates) == len(set(candidates))
        assert candidates[0] == "Kaguya-sama: Love is War Season 2"
        assert "Kaguya-sama: Love is War" in candidates
        assert "Kaguya" in candidates

    def test_spaced_dash_wins_over_hyphen(self):
        # " - " is present, so the hyphen inside "Kaguya-sama" is kept
        candidates = build_candidate_queries("Kaguya-sama - Love is War")

        assert candidates == ["Kaguya-sama - Love is War", "Kaguya-sama"]
