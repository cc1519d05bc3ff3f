"""Catalog domain services (token, metadata, recommendations, genres)."""

from .genres import GENRES, GenreCatalog
from .metadata_resolver import MetadataResolver
from .recommendations import RecommendationRequester
from .token_provider import TokenProvider

__all__ = [
    "GENRES",
    "GenreCatalog",
    "MetadataResolver",
    "RecommendationRequester",
    "TokenProvider",
]
