import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from curator.domain.seeds import SeedCollector
from curator.models import RecommendedTrack

from .guards import ActionGuard

ACTIONS = ("token", "add_artist", "add_track", "generate_playlist")


@dataclass
class CurationSession:
    """Application state for one browser session.

    Seeds change only through ``seeds`` (the collector); everything else is
    written by the curation service under ``_lock``.
    """
    id: str
    seeds: SeedCollector
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    token: str = ""
    # Set by the first exchange; later actions do not fetch again on their own
    token_attempted: bool = False
    last_error: Optional[str] = None
    recommended_tracks: List[RecommendedTrack] = field(default_factory=list)
    playlist_generated: bool = False
    # Bumped on reset so a generation that started earlier cannot publish its result
    generation: int = 0

    # Presentation preferences
    dark_mode: bool = False
    genre_search: str = ""
    displayed_genres: List[str] = field(default_factory=list)
    show_all_tracks: bool = False

    created_at: float = field(default_factory=time.time)
    last_seen: float = field(default_factory=time.time)
    guards: Dict[str, ActionGuard] = field(
        default_factory=lambda: {name: ActionGuard(name) for name in ACTIONS},
        repr=False,
    )

    @property
    def has_token(self) -> bool:
        with self._lock:
            return bool(self.token)

    def current_token(self) -> str:
        with self._lock:
            return self.token

    def touch(self) -> None:
        with self._lock:
            self.last_seen = time.time()

    def set_error(self, message: Optional[str]) -> None:
        with self._lock:
            self.last_error = message

    def in_flight(self) -> Dict[str, bool]:
        return {name: guard.in_flight for name, guard in self.guards.items()}

    def to_dict(self) -> dict:
        seeds = self.seeds.snapshot()
        with self._lock:
            return {
                "session_id": self.id,
                "has_token": bool(self.token),
                "token_attempted": self.token_attempted,
                "seeds": seeds.to_dict(),
                "limits": {"per_category": self.seeds.category_limit},
                "last_error": self.last_error,
                "playlist_generated": self.playlist_generated,
                "tracks": [track.model_dump(mode="json") for track in self.recommended_tracks],
                "dark_mode": self.dark_mode,
                "in_flight": self.in_flight(),
            }


class SessionRegistry:
    """In-memory map of session id to CurationSession (nothing is persisted)."""

    def __init__(self, idle_ttl_seconds: Optional[float] = None) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, CurationSession] = {}
        self._idle_ttl = idle_ttl_seconds

    def get(self, session_id: str) -> Optional[CurationSession]:
        with self._lock:
            sess = self._sessions.get(session_id)
            if sess is not None:
                sess.touch()
            return sess

    def get_or_create(self, session_id: str,
                      factory: Callable[[str], CurationSession]) -> Tuple[CurationSession, bool]:
        """Return ``(session, created)``; ``factory`` runs under the registry lock."""
        with self._lock:
            sess = self._sessions.get(session_id)
            if sess is not None:
                sess.touch()
                return sess, False
            sess = factory(session_id)
            self._sessions[session_id] = sess
            return sess, True

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def purge_idle(self, now: Optional[float] = None) -> int:
        if not self._idle_ttl:
            return 0
        now = time.time() if now is None else now
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if now - s.last_seen > self._idle_ttl]
            for sid in stale:
                self._sessions.pop(sid, None)
            return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["ACTIONS", "CurationSession", "SessionRegistry"]
