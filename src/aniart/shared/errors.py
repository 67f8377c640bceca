"""AniArt error types.

Every failure raised inside AniArt is an ``AniArtError`` carrying an
``ErrorCode`` and an ``ErrorContext``. Callers branch on the subclass
(network vs. parsing vs. configuration) or on the code; the context is
what ends up in structured log lines, so it only holds primitives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

PrimitiveContextValue = Union[str, int, float, bool]

# Never written to logs or CLI output
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("api_key",)


class ErrorCode(str, Enum):
    """All error codes raised by AniArt."""

    # TMDB API
    TMDB_API_CONNECTION_ERROR = "TMDB_API_CONNECTION_ERROR"
    TMDB_API_AUTHENTICATION_ERROR = "TMDB_API_AUTHENTICATION_ERROR"
    TMDB_API_RATE_LIMIT_EXCEEDED = "TMDB_API_RATE_LIMIT_EXCEEDED"
    TMDB_API_REQUEST_FAILED = "TMDB_API_REQUEST_FAILED"
    TMDB_API_TIMEOUT = "TMDB_API_TIMEOUT"
    TMDB_API_SERVER_ERROR = "TMDB_API_SERVER_ERROR"
    TMDB_API_INVALID_RESPONSE = "TMDB_API_INVALID_RESPONSE"

    # Image warm-up
    IMAGE_FETCH_FAILED = "IMAGE_FETCH_FAILED"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_CONFIG = "MISSING_CONFIG"


def _to_primitive(key: str, value: Any) -> PrimitiveContextValue:
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    msg = f"Context value {key!r} has unsupported type {type(value).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True)
class ErrorContext:
    """Where an error happened.

    Attributes:
        operation: Name of the failing operation, e.g. "search_tv"
        entity_id: Catalog id the operation was about, if any
        additional_data: Extra primitive values; Path and Enum values are
            converted, None values dropped, anything else is a TypeError
    """

    operation: str | None = None
    entity_id: int | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is None:
            return
        if not isinstance(self.additional_data, dict):
            msg = f"additional_data must be a dict, got {type(self.additional_data).__name__}"
            raise TypeError(msg)
        converted = {
            key: _to_primitive(key, value)
            for key, value in self.additional_data.items()
            if value is not None
        }
        object.__setattr__(self, "additional_data", converted)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Context as a dict for logging, without sensitive keys.

        Example:
            >>> ErrorContext(operation="search_tv", additional_data={"api_key": "x"}).safe_dict()
            {'operation': 'search_tv', 'additional_data': {}}
        """
        hidden = SAFE_DICT_MASK_KEYS if mask_keys is None else mask_keys

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.entity_id is not None:
            data["entity_id"] = self.entity_id
        data["additional_data"] = {
            key: value
            for key, value in (self.additional_data or {}).items()
            if key not in hidden
        }
        return data


class AniArtError(Exception):
    """Base class for AniArt errors.

    Args:
        code: What went wrong
        message: Human-readable description
        context: Operation and entity the error belongs to
        original_error: Lower-level exception this error wraps
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(f"{code.value}: {message}")
        self.code = code
        self.message = message
        self.context = context if context is not None else ErrorContext()
        self.original_error = original_error

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by JSON CLI output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": None if self.original_error is None else str(self.original_error),
        }


class DomainError(AniArtError):
    """Data from outside does not fit AniArt's model of it."""


class InfrastructureError(AniArtError):
    """An external system (TMDB, the image CDN) failed."""


class AniArtNetworkError(InfrastructureError):
    """Connection failures, timeouts and HTTP error statuses."""


class AniArtParsingError(DomainError):
    """A response body that is not JSON or does not match its schema."""


class ApplicationError(AniArtError):
    """Invalid configuration or command usage."""


class SecurityError(AniArtError):
    """Missing or rejected credentials."""


def create_api_error(
    message: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """InfrastructureError for a failed TMDB interaction."""
    return InfrastructureError(
        ErrorCode.TMDB_API_REQUEST_FAILED,
        message,
        ErrorContext(operation=operation),
        original_error,
    )


def create_parsing_error(
    message: str,
    model_name: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> AniArtParsingError:
    """AniArtParsingError naming the model the payload failed to match."""
    return AniArtParsingError(
        ErrorCode.TMDB_API_INVALID_RESPONSE,
        message,
        ErrorContext(operation=operation, additional_data={"model_name": model_name}),
        original_error,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """ApplicationError for a configuration problem."""
    return ApplicationError(
        ErrorCode.CONFIGURATION_ERROR,
        message,
        ErrorContext(
            operation=operation,
            additional_data={"config_key": config_key} if config_key else None,
        ),
        original_error,
    )
