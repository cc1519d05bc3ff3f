"""Error taxonomy shared by the catalog, seed and curation layers."""

from __future__ import annotations

from typing import Optional


class CuratorError(Exception):
    """Base class for errors surfaced at an action boundary."""

    error_code = "internal_error"

    def __init__(self, message: str, *, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class AuthError(CuratorError):
    """Token exchange failed or the bearer token was rejected."""

    error_code = "auth_error"


class ValidationError(CuratorError):
    """User input (seed link, genre, seed counts) was rejected."""

    error_code = "validation_error"


class NotFoundError(CuratorError):
    """Metadata lookup did not find the artist or track."""

    error_code = "not_found"


class RecommendationError(CuratorError):
    """The recommendation call failed."""

    error_code = "recommendation_error"


class ParseError(CuratorError):
    """An upstream response did not have the expected shape."""

    error_code = "parse_error"


__all__ = [
    "CuratorError",
    "AuthError",
    "ValidationError",
    "NotFoundError",
    "RecommendationError",
    "ParseError",
]
