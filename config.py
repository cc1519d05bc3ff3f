#!/usr/bin/env python
# config.py
import os
from typing import List, Optional

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


def _get_first(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value and value.strip():
            return value.strip()
    return None


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-curator-secret-key'

    # Spotify API (app-level client credentials only)
    # SPOTIFY_* names are accepted for .env files written for the web frontend
    SPOTIPY_CLIENT_ID = _get_first('SPOTIPY_CLIENT_ID', 'SPOTIFY_CLIENT_ID')
    SPOTIPY_CLIENT_SECRET = _get_first('SPOTIPY_CLIENT_SECRET', 'SPOTIFY_CLIENT_SECRET')
    SPOTIFY_AUTH_URL = os.getenv('SPOTIFY_AUTH_URL', 'https://accounts.spotify.com/api/token')
    SPOTIFY_API_BASE_URL = os.getenv('SPOTIFY_API_BASE_URL', 'https://api.spotify.com/v1')
    SPOTIFY_HTTP_TIMEOUT_SECONDS = _get_float('SPOTIFY_HTTP_TIMEOUT_SECONDS', 10.0)

    # Seed collection and recommendation request
    SEED_CATEGORY_LIMIT = _get_int('SEED_CATEGORY_LIMIT', 5)
    # Combined ceiling across artists + tracks + genres; 0 disables the check
    MAX_TOTAL_SEEDS = _get_int('MAX_TOTAL_SEEDS', 5)
    RECOMMENDATION_LIMIT = _get_int('RECOMMENDATION_LIMIT', 10)

    # Presentation
    GENRE_SAMPLE_SIZE = _get_int('GENRE_SAMPLE_SIZE', 10)
    PLAYLIST_PREVIEW_COUNT = _get_int('PLAYLIST_PREVIEW_COUNT', 5)

    # In-memory sessions are dropped after this much inactivity
    SESSION_IDLE_TTL_SECONDS = _get_int('SESSION_IDLE_TTL_SECONDS', 3600)

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)

    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')
    CONTENT_SECURITY_POLICY = os.getenv(
        'CONTENT_SECURITY_POLICY',
        "default-src 'self'; img-src 'self' https://i.scdn.co data:; media-src https://p.scdn.co; style-src 'self' 'unsafe-inline'",
    )
    # /readyz reports 503 until client credentials are configured
    READINESS_REQUIRE_CREDENTIALS = _get_bool('READINESS_REQUIRE_CREDENTIALS', True)
