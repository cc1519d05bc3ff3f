#!/usr/bin/env python
"""
Centralized configuration schema for the curator services.

Merges defaults from config.Config with optional runtime overrides and
validates the limits the seed and recommendation layers rely on.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import Config

# Upper bound the recommendation endpoint accepts for ``limit``
MAX_RECOMMENDATION_LIMIT = 100


def _coerce_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


class AppSettings(BaseModel):
    """Settings handed to the token, metadata and recommendation services."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None

    # Endpoints
    auth_url: str = "https://accounts.spotify.com/api/token"
    api_base_url: str = "https://api.spotify.com/v1"
    http_timeout: float = 10.0

    # Seeds and recommendations
    seed_category_limit: int = 5
    max_total_seeds: int = 5
    recommendation_limit: int = 10

    # Presentation
    genre_sample_size: int = 10
    playlist_preview_count: int = 5

    session_idle_ttl: int = 3600

    @property
    def has_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @field_validator("api_base_url", "auth_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("http_timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> float:
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10.0
        return timeout if timeout > 0 else 10.0

    @field_validator("seed_category_limit", mode="before")
    @classmethod
    def _coerce_category_limit(cls, value: object) -> int:
        return max(1, min(_coerce_int(value, 5), 5))

    @field_validator("max_total_seeds", mode="before")
    @classmethod
    def _coerce_total_seeds(cls, value: object) -> int:
        return max(0, _coerce_int(value, 5))

    @field_validator("recommendation_limit", mode="before")
    @classmethod
    def _coerce_recommendation_limit(cls, value: object) -> int:
        return max(1, min(_coerce_int(value, 10), MAX_RECOMMENDATION_LIMIT))

    @field_validator("genre_sample_size", "playlist_preview_count", mode="before")
    @classmethod
    def _coerce_positive(cls, value: object) -> int:
        return max(1, _coerce_int(value, 10))

    @field_validator("session_idle_ttl", mode="before")
    @classmethod
    def _coerce_ttl(cls, value: object) -> int:
        return max(60, _coerce_int(value, 3600))


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIPY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIPY_CLIENT_SECRET,
        "auth_url": Config.SPOTIFY_AUTH_URL,
        "api_base_url": Config.SPOTIFY_API_BASE_URL,
        "http_timeout": Config.SPOTIFY_HTTP_TIMEOUT_SECONDS,
        "seed_category_limit": Config.SEED_CATEGORY_LIMIT,
        "max_total_seeds": Config.MAX_TOTAL_SEEDS,
        "recommendation_limit": Config.RECOMMENDATION_LIMIT,
        "genre_sample_size": Config.GENRE_SAMPLE_SIZE,
        "playlist_preview_count": Config.PLAYLIST_PREVIEW_COUNT,
        "session_idle_ttl": Config.SESSION_IDLE_TTL_SECONDS,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "MAX_RECOMMENDATION_LIMIT",
    "load_app_settings",
]
