"""Typed models for Spotify Web API responses."""

from .dto import (
    Album,
    AlbumImage,
    EntityName,
    ExternalUrls,
    RecommendationResponse,
    RecommendedTrack,
    TokenResponse,
    TrackArtist,
    parse_response,
)

__all__ = [
    "Album",
    "AlbumImage",
    "EntityName",
    "ExternalUrls",
    "RecommendationResponse",
    "RecommendedTrack",
    "TokenResponse",
    "TrackArtist",
    "parse_response",
]
