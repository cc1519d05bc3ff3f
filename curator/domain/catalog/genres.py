"""Static genre seed catalog with sampling and search."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

# Genre seeds accepted by the recommendation endpoint
GENRES: Sequence[str] = (
    "acoustic", "afrobeat", "alt-rock", "alternative", "ambient", "anime",
    "black-metal", "bluegrass", "blues", "bossanova", "brazil", "breakbeat",
    "british", "cantopop", "chicago-house", "children", "chill", "classical",
    "club", "comedy", "country", "dance", "dancehall", "death-metal",
    "deep-house", "detroit-techno", "disco", "disney", "drum-and-bass", "dub",
    "dubstep", "edm", "electro", "electronic", "emo", "folk", "forro", "french",
    "funk", "garage", "german", "gospel", "goth", "grindcore", "groove",
    "grunge", "guitar", "happy", "hard-rock", "hardcore", "hardstyle",
    "heavy-metal", "hip-hop", "holidays", "honky-tonk", "house", "idm",
    "indian", "indie", "indie-pop", "industrial", "iranian", "j-dance",
    "j-idol", "j-pop", "j-rock", "jazz", "k-pop", "kids", "latin", "latino",
    "malay", "mandopop", "metal", "metal-misc", "metalcore", "minimal-techno",
    "movies", "mpb", "new-age", "new-release", "opera", "pagode", "party",
    "philippines-opm", "piano", "pop", "pop-film", "post-dubstep", "power-pop",
    "progressive-house", "psych-rock", "punk", "punk-rock", "r-n-b",
    "rainy-day", "reggae", "reggaeton", "road-trip", "rock", "rock-n-roll",
    "rockabilly", "romance", "sad", "salsa", "samba", "sertanejo", "show-tunes",
    "singer-songwriter", "ska", "sleep", "songwriter", "soul", "soundtracks",
    "spanish", "study", "summer", "swedish", "synth-pop", "tango", "techno",
    "trance", "trip-hop", "turkish", "work-out", "world-music",
)


class GenreCatalog:
    def __init__(self, genres: Optional[Sequence[str]] = None, rng: Optional[random.Random] = None):
        self._genres: List[str] = list(genres if genres is not None else GENRES)
        self._known = {g.lower() for g in self._genres}
        self._rng = rng or random.Random()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._known

    def __len__(self) -> int:
        return len(self._genres)

    def all(self) -> List[str]:
        return list(self._genres)

    def normalize(self, name: str) -> Optional[str]:
        """Return the catalog spelling of ``name`` or None when unknown."""
        key = (name or "").strip().lower()
        for genre in self._genres:
            if genre.lower() == key:
                return genre
        return None

    def sample(self, count: int) -> List[str]:
        count = max(0, min(count, len(self._genres)))
        return self._rng.sample(self._genres, count)

    def search(self, term: Optional[str], sample_size: int = 10) -> List[str]:
        """Substring match in catalog order; a blank term yields a fresh random sample."""
        needle = (term or "").strip().lower()
        if not needle:
            return self.sample(sample_size)
        return [g for g in self._genres if needle in g.lower()]


__all__ = ["GENRES", "GenreCatalog"]
