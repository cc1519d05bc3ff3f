"""Seed link parsing and per-session seed collection."""

from .collector import DEFAULT_CATEGORY_LIMIT, SeedCollector, SeedSnapshot
from .links import SpotifyLink, extract_id, is_spotify_link, parse_link

__all__ = [
    "DEFAULT_CATEGORY_LIMIT",
    "SeedCollector",
    "SeedSnapshot",
    "SpotifyLink",
    "extract_id",
    "is_spotify_link",
    "parse_link",
]
