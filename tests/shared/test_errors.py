"""Tests for the AniArt error hierarchy."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pytest

from aniart.shared.errors import (
    AniArtError,
    AniArtNetworkError,
    AniArtParsingError,
    ApplicationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_api_error,
    create_config_error,
    create_parsing_error,
)


class _Color(Enum):
    RED = "red"


class TestErrorContext:
    def test_additional_data_is_coerced(self):
        context = ErrorContext(
            operation="load",
            additional_data={"path": Path("a/b.toml"), "color": _Color.RED, "skip": None},
        )

        assert context.additional_data == {"path": str(Path("a/b.toml")), "color": "red"}

    def test_rejects_non_primitive_values(self):
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_safe_dict_masks_api_key(self):
        context = ErrorContext(
            operation="search_tv",
            entity_id=5,
            additional_data={"api_key": "secret", "query": "Frieren"},
        )

        assert context.safe_dict() == {
            "operation": "search_tv",
            "entity_id": 5,
            "additional_data": {"query": "Frieren"},
        }


class TestAniArtError:
    def test_str_and_to_dict(self):
        original = ValueError("bad json")
        error = AniArtParsingError(
            ErrorCode.TMDB_API_INVALID_RESPONSE,
            "Body is not JSON",
            ErrorContext(operation="search_tv"),
            original,
        )

        assert str(error) == "TMDB_API_INVALID_RESPONSE: Body is not JSON"
        assert error.to_dict() == {
            "code": "TMDB_API_INVALID_RESPONSE",
            "message": "Body is not JSON",
            "context": {"operation": "search_tv", "additional_data": {}},
            "original_error": "bad json",
        }

    def test_hierarchy(self):
        assert issubclass(AniArtNetworkError, InfrastructureError)
        assert issubclass(AniArtParsingError, DomainError)
        assert issubclass(ApplicationError, AniArtError)

    def test_default_context(self):
        error = AniArtNetworkError(ErrorCode.TMDB_API_TIMEOUT, "timed out")

        assert error.context == ErrorContext()
        assert error.original_error is None


class TestFactories:
    def test_create_api_error(self):
        error = create_api_error("search failed", operation="find_series_match")

        assert isinstance(error, InfrastructureError)
        assert error.code == ErrorCode.TMDB_API_REQUEST_FAILED
        assert error.context.operation == "find_series_match"

    def test_create_parsing_error(self):
        error = create_parsing_error("bad payload", model_name="TMDBTvDetails")

        assert error.context.additional_data == {"model_name": "TMDBTvDetails"}

    def test_create_config_error(self):
        error = create_config_error("invalid", config_key="prefetch.concurrency")

        assert error.code == ErrorCode.CONFIGURATION_ERROR
        assert error.context.additional_data == {"config_key": "prefetch.concurrency"}
        assert create_config_error("invalid").context.additional_data is None
