#!/usr/bin/env python
"""
Pydantic DTOs for the Spotify Web API responses the curator consumes.

Responses are parsed once at the HTTP boundary; the rest of the
application only sees these typed models.
"""

from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from curator.errors import ParseError

ModelT = TypeVar("ModelT", bound=BaseModel)


class TokenResponse(BaseModel):
    """Body of a successful client-credentials exchange."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None


class EntityName(BaseModel):
    """Display metadata for an artist or track chip."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str


class ExternalUrls(BaseModel):
    model_config = ConfigDict(extra="allow")

    spotify: Optional[str] = None


class TrackArtist(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str
    external_urls: ExternalUrls = Field(default_factory=ExternalUrls)


class AlbumImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class Album(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    images: List[AlbumImage] = Field(default_factory=list)


class RecommendedTrack(BaseModel):
    """One entry of the recommendation ``tracks`` array.

    Unknown fields are kept so the track can be handed back to API clients
    unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str
    artists: List[TrackArtist] = Field(default_factory=list)
    album: Album = Field(default_factory=Album)
    preview_url: Optional[str] = None
    duration_ms: Optional[int] = Field(default=None, ge=0)
    external_urls: ExternalUrls = Field(default_factory=ExternalUrls)

    @property
    def image_url(self) -> Optional[str]:
        return self.album.images[0].url if self.album.images else None

    @property
    def spotify_url(self) -> Optional[str]:
        return self.external_urls.spotify

    @property
    def has_preview(self) -> bool:
        return bool(self.preview_url)


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tracks: List[RecommendedTrack]


def parse_response(model: Type[ModelT], payload: Any, *, what: str) -> ModelT:
    """Validate ``payload`` against ``model`` or raise :class:`ParseError`."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ParseError(
            f"Unexpected {what} response from Spotify.",
            detail=f"{exc.error_count()} validation error(s)",
        ) from exc


__all__ = [
    "TokenResponse",
    "EntityName",
    "ExternalUrls",
    "TrackArtist",
    "AlbumImage",
    "Album",
    "RecommendedTrack",
    "RecommendationResponse",
    "parse_response",
]
