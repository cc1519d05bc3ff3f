#!/usr/bin/env python
"""
Action boundary for the curation workflow.

Each public method runs one user action against a CurationSession and
returns an ActionResult. Typed errors from the catalog and seed layers are
caught here and turned into the single message string the UI shows; the
message is also stored as the session's ``last_error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from curator.core import ActionBusy, CurationSession, SessionRegistry
from curator.domain.catalog import GenreCatalog, MetadataResolver, RecommendationRequester, TokenProvider
from curator.domain.seeds import SeedCollector, SeedSnapshot
from curator.errors import AuthError, CuratorError, ValidationError
from curator.observability.metrics import record_recommendation, record_seed_addition, update_session_gauge
from curator.settings import AppSettings

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    ok: bool
    message: Optional[str] = None
    error_code: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        payload: Dict[str, Any] = {"status": "success" if self.ok else "error"}
        if self.error_code:
            payload["error_code"] = self.error_code
        if self.message:
            payload["message"] = self.message
        payload.update(self.data)
        return payload


def _busy(action: str) -> ActionResult:
    return ActionResult(
        ok=False,
        error_code="busy",
        message="Please wait for the current request to finish.",
        data={"action": action},
    )


class CurationService:
    def __init__(
        self,
        settings: AppSettings,
        token_provider: TokenProvider,
        metadata_resolver: MetadataResolver,
        recommender: RecommendationRequester,
        genre_catalog: Optional[GenreCatalog] = None,
        registry: Optional[SessionRegistry] = None,
    ) -> None:
        self.settings = settings
        self.token_provider = token_provider
        self.metadata_resolver = metadata_resolver
        self.recommender = recommender
        self.genre_catalog = genre_catalog or GenreCatalog()
        self.registry = registry or SessionRegistry(idle_ttl_seconds=settings.session_idle_ttl)

    # --- Sessions ---
    def _new_session(self, session_id: str) -> CurationSession:
        holder: Dict[str, CurationSession] = {}
        collector = SeedCollector(
            resolver=self.metadata_resolver,
            token_getter=lambda: self._token_for(holder["session"]),
            genre_catalog=self.genre_catalog,
            category_limit=self.settings.seed_category_limit,
        )
        sess = CurationSession(id=session_id, seeds=collector)
        sess.displayed_genres = self.genre_catalog.sample(self.settings.genre_sample_size)
        holder["session"] = sess
        return sess

    def start_session(self, session_id: str) -> CurationSession:
        """Return the session for ``session_id``, creating it on first use.

        No token is fetched here; the first action that needs one runs the
        exchange (see ``_token_for``).
        """
        self.registry.purge_idle()
        sess, created = self.registry.get_or_create(session_id, self._new_session)
        update_session_gauge(len(self.registry))
        if created:
            logger.info("Started curation session %s", session_id)
        return sess

    def end_session(self, session_id: str) -> bool:
        dropped = self.registry.drop(session_id)
        update_session_gauge(len(self.registry))
        return dropped

    def retry_token(self, sess: CurationSession) -> ActionResult:
        """Run the token exchange for ``sess``; a failure leaves the previous token in place."""
        try:
            with sess.guards["token"].hold():
                with sess._lock:
                    sess.token_attempted = True
                try:
                    token = self.token_provider.fetch_token()
                except CuratorError as exc:
                    logger.warning("Token exchange failed for session %s: %s", sess.id, exc)
                    message = f"Could not connect to Spotify. {exc}"
                    sess.set_error(message)
                    return ActionResult(ok=False, error_code=exc.error_code, message=message)
                with sess._lock:
                    sess.token = token
                    sess.last_error = None
                return ActionResult(ok=True, data={"has_token": True})
        except ActionBusy:
            return _busy("token")

    def _token_for(self, sess: CurationSession) -> str:
        """Return the session token, running the first exchange on demand.

        After one attempt the stored token is returned as is (possibly empty);
        only ``retry_token`` fetches again.
        """
        with sess._lock:
            if sess.token or sess.token_attempted:
                return sess.token
        result = self.retry_token(sess)
        if not result.ok:
            raise AuthError(result.message or "Could not connect to Spotify.")
        return sess.current_token()

    # --- Seeds ---
    def add_artist(self, sess: CurationSession, link: str) -> ActionResult:
        return self._add_entity(sess, "artist", link)

    def add_track(self, sess: CurationSession, link: str) -> ActionResult:
        return self._add_entity(sess, "track", link)

    def _add_entity(self, sess: CurationSession, kind: str, link: str) -> ActionResult:
        add: Callable[[str], Optional[str]] = (
            sess.seeds.add_artist if kind == "artist" else sess.seeds.add_track
        )
        try:
            with sess.guards[f"add_{kind}"].hold():
                try:
                    entity_id = add(link)
                except ValidationError as exc:
                    record_seed_addition(kind, "invalid")
                    sess.set_error(exc.message)
                    return ActionResult(ok=False, error_code=exc.error_code, message=exc.message)
                except CuratorError as exc:
                    record_seed_addition(kind, exc.error_code)
                    message = f"Error adding {kind}. Please try again. {exc}"
                    sess.set_error(message)
                    return ActionResult(ok=False, error_code=exc.error_code, message=message)
        except ActionBusy:
            return _busy(f"add_{kind}")

        snapshot = sess.seeds.snapshot()
        if entity_id is None:
            record_seed_addition(kind, "ignored")
            return ActionResult(ok=True, data={"added": False, "seeds": snapshot.to_dict()})
        record_seed_addition(kind, "added")
        sess.set_error(None)
        return ActionResult(ok=True, data={"added": True, "id": entity_id, "seeds": snapshot.to_dict()})

    def remove_artist(self, sess: CurationSession, index: int) -> ActionResult:
        return self._removed(sess, sess.seeds.remove_artist(index), "artist")

    def remove_track(self, sess: CurationSession, index: int) -> ActionResult:
        return self._removed(sess, sess.seeds.remove_track(index), "track")

    def remove_genre(self, sess: CurationSession, name: str) -> ActionResult:
        sess.seeds.remove_genre(name)
        return ActionResult(ok=True, data={"seeds": sess.seeds.snapshot().to_dict()})

    @staticmethod
    def _removed(sess: CurationSession, removed: bool, kind: str) -> ActionResult:
        seeds = sess.seeds.snapshot().to_dict()
        if not removed:
            return ActionResult(ok=False, error_code="not_found",
                                message=f"No {kind} at that position.", data={"seeds": seeds})
        return ActionResult(ok=True, data={"seeds": seeds})

    def toggle_genre(self, sess: CurationSession, name: str) -> ActionResult:
        try:
            selected = sess.seeds.toggle_genre(name)
        except ValidationError as exc:
            record_seed_addition("genre", "invalid")
            sess.set_error(exc.message)
            return ActionResult(ok=False, error_code=exc.error_code, message=exc.message)
        if selected:
            record_seed_addition("genre", "added")
        return ActionResult(ok=True, data={"selected": selected, "seeds": sess.seeds.snapshot().to_dict()})

    def search_genres(self, sess: Optional[CurationSession], term: Optional[str]) -> list:
        genres = self.genre_catalog.search(term, self.settings.genre_sample_size)
        if sess is not None:
            with sess._lock:
                sess.genre_search = (term or "").strip()
                sess.displayed_genres = genres
        return genres

    # --- Recommendations ---
    def _check_seed_limits(self, seeds: SeedSnapshot) -> None:
        if seeds.is_empty:
            raise ValidationError("Add at least one artist, track or genre first.")
        limit = self.settings.max_total_seeds
        if limit and seeds.total > limit:
            raise ValidationError(
                f"Spotify accepts at most {limit} seeds in total; remove {seeds.total - limit} to continue.",
                detail=f"{seeds.total} seeds selected",
            )

    def generate_playlist(self, sess: CurationSession, limit: Optional[int] = None) -> ActionResult:
        try:
            with sess.guards["generate_playlist"].hold():
                seeds = sess.seeds.snapshot()
                with sess._lock:
                    generation = sess.generation
                try:
                    self._check_seed_limits(seeds)
                    token = self._token_for(sess)
                    tracks = self.recommender.request_recommendations(seeds, token, limit=limit)
                except ValidationError as exc:
                    record_recommendation("invalid")
                    sess.set_error(exc.message)
                    return ActionResult(ok=False, error_code=exc.error_code, message=exc.message)
                except CuratorError as exc:
                    record_recommendation("error")
                    message = f"Error generating playlist. {exc}"
                    sess.set_error(message)
                    return ActionResult(ok=False, error_code=exc.error_code, message=message)

                with sess._lock:
                    if sess.generation != generation:
                        logger.info("Discarding playlist for session %s: reset while in flight", sess.id)
                        return ActionResult(ok=False, error_code="stale",
                                            message="The session was reset while the playlist was generating.")
                    sess.recommended_tracks = list(tracks)
                    sess.playlist_generated = True
                    sess.show_all_tracks = False
                    sess.last_error = None
        except ActionBusy:
            return _busy("generate_playlist")

        record_recommendation("success")
        return ActionResult(ok=True, data={
            "tracks": [track.model_dump(mode="json") for track in tracks],
            "count": len(tracks),
        })

    def reset(self, sess: CurationSession) -> ActionResult:
        sess.seeds.clear()
        with sess._lock:
            sess.generation += 1
            sess.recommended_tracks = []
            sess.playlist_generated = False
            sess.show_all_tracks = False
            sess.last_error = None
        return ActionResult(ok=True, data={"seeds": sess.seeds.snapshot().to_dict()})

    # --- Preferences ---
    def toggle_dark_mode(self, sess: CurationSession) -> bool:
        with sess._lock:
            sess.dark_mode = not sess.dark_mode
            return sess.dark_mode

    def toggle_show_all(self, sess: CurationSession) -> bool:
        with sess._lock:
            sess.show_all_tracks = not sess.show_all_tracks
            return sess.show_all_tracks


__all__ = ["ActionResult", "CurationService"]
