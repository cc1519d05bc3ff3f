"""Per-session accumulation of artist, track and genre seeds."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

from curator.domain.catalog.genres import GenreCatalog
from curator.errors import ValidationError
from curator.models import EntityName

from .links import parse_link

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_LIMIT = 5


class NameResolver(Protocol):
    def resolve_artist(self, artist_id: str, token: str) -> EntityName: ...

    def resolve_track(self, track_id: str, token: str) -> EntityName: ...


@dataclass(frozen=True)
class SeedSnapshot:
    """Immutable copy of a seed set, safe to read outside the collector lock."""

    artist_ids: Tuple[str, ...] = ()
    artist_names: Tuple[str, ...] = ()
    track_ids: Tuple[str, ...] = ()
    track_names: Tuple[str, ...] = ()
    genres: Tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.artist_ids) + len(self.track_ids) + len(self.genres)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict:
        return {
            "artists": [
                {"id": artist_id, "name": name}
                for artist_id, name in zip(self.artist_ids, self.artist_names)
            ],
            "tracks": [
                {"id": track_id, "name": name}
                for track_id, name in zip(self.track_ids, self.track_names)
            ],
            "genres": list(self.genres),
            "total": self.total,
        }


class SeedCollector:
    """Validates and accumulates seeds, keeping ids and display names in lock-step.

    Artist and track additions resolve a display name before anything is
    appended, so a failed lookup leaves the seed set untouched. Adds beyond
    ``category_limit`` are silently ignored.
    """

    def __init__(
        self,
        resolver: NameResolver,
        token_getter: Callable[[], str],
        genre_catalog: Optional[GenreCatalog] = None,
        category_limit: int = DEFAULT_CATEGORY_LIMIT,
    ) -> None:
        self._resolver = resolver
        self._token_getter = token_getter
        self._genre_catalog = genre_catalog or GenreCatalog()
        self.category_limit = category_limit
        self._lock = threading.RLock()

        self._artist_ids: List[str] = []
        self._artist_names: List[str] = []
        self._track_ids: List[str] = []
        self._track_names: List[str] = []
        self._genres: List[str] = []

    # --- Read side ---
    def snapshot(self) -> SeedSnapshot:
        with self._lock:
            return SeedSnapshot(
                artist_ids=tuple(self._artist_ids),
                artist_names=tuple(self._artist_names),
                track_ids=tuple(self._track_ids),
                track_names=tuple(self._track_names),
                genres=tuple(self._genres),
            )

    def is_full(self, kind: str) -> bool:
        with self._lock:
            return len(self._list_for(kind)) >= self.category_limit

    def _list_for(self, kind: str) -> List[str]:
        if kind == "artist":
            return self._artist_ids
        if kind == "track":
            return self._track_ids
        if kind == "genre":
            return self._genres
        raise ValueError(f"Unknown seed kind: {kind}")

    # --- Artists / tracks ---
    def add_artist(self, link: str) -> Optional[str]:
        return self._add_entity("artist", link, self._artist_ids, self._artist_names,
                                self._resolver.resolve_artist)

    def add_track(self, link: str) -> Optional[str]:
        return self._add_entity("track", link, self._track_ids, self._track_names,
                                self._resolver.resolve_track)

    def _add_entity(self, kind: str, link: str, ids: List[str], names: List[str],
                    resolve: Callable[[str, str], EntityName]) -> Optional[str]:
        with self._lock:
            if len(ids) >= self.category_limit:
                logger.debug("Ignoring %s seed: category already holds %d", kind, len(ids))
                return None

        parsed = parse_link(link, expected_kind=kind)
        entity_id = parsed.entity_id

        with self._lock:
            if entity_id in ids:
                return entity_id

        # Network call happens outside the lock; lists change only after it succeeds
        entity = resolve(entity_id, self._token_getter())

        with self._lock:
            if entity_id in ids:
                return entity_id
            if len(ids) >= self.category_limit:
                logger.debug("Dropping %s seed %s: category filled while resolving", kind, entity_id)
                return None
            ids.append(entity_id)
            names.append(entity.name)
        logger.info("Added %s seed %s (%s)", kind, entity_id, entity.name)
        return entity_id

    def remove_artist(self, index: int) -> bool:
        return self._remove_at(index, self._artist_ids, self._artist_names)

    def remove_track(self, index: int) -> bool:
        return self._remove_at(index, self._track_ids, self._track_names)

    def _remove_at(self, index: int, ids: List[str], names: List[str]) -> bool:
        with self._lock:
            if index < 0 or index >= len(ids):
                return False
            ids.pop(index)
            names.pop(index)
            return True

    # --- Genres ---
    def _normalize_genre(self, name: str) -> str:
        genre = self._genre_catalog.normalize(name)
        if genre is None:
            raise ValidationError("Please choose a genre from the list.", detail=f"unknown genre '{name}'")
        return genre

    def add_genre(self, name: str) -> Optional[str]:
        genre = self._normalize_genre(name)
        with self._lock:
            if genre in self._genres:
                return genre
            if len(self._genres) >= self.category_limit:
                return None
            self._genres.append(genre)
            return genre

    def toggle_genre(self, name: str) -> bool:
        """Select ``name`` if absent (capacity permitting), deselect it otherwise.

        Returns True when the genre is selected afterwards.
        """
        genre = self._normalize_genre(name)
        with self._lock:
            if genre in self._genres:
                self._genres.remove(genre)
                return False
            return self.add_genre(genre) is not None

    def remove_genre(self, name: str) -> bool:
        key = (name or "").strip().lower()
        with self._lock:
            for genre in self._genres:
                if genre.lower() == key:
                    self._genres.remove(genre)
                    return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._artist_ids.clear()
            self._artist_names.clear()
            self._track_ids.clear()
            self._track_names.clear()
            self._genres.clear()


__all__ = ["DEFAULT_CATEGORY_LIMIT", "NameResolver", "SeedCollector", "SeedSnapshot"]
