"""Recommendation endpoint wrapper."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import urlencode

import requests

from curator.errors import ParseError, RecommendationError
from curator.models import RecommendationResponse, RecommendedTrack, parse_response
from curator.observability.metrics import observe_upstream_latency
from curator.settings import AppSettings

if TYPE_CHECKING:  # pragma: no cover - typing only
    from curator.domain.seeds import SeedSnapshot

logger = logging.getLogger(__name__)


class RecommendationRequester:
    """Issues one GET to ``/recommendations`` per call."""

    def __init__(self, settings: AppSettings, session: Optional[requests.Session] = None):
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self._settings.api_base_url}/recommendations"

    @staticmethod
    def build_params(seeds: "SeedSnapshot", limit: int) -> dict:
        # Empty categories are still sent (as empty values); the endpoint ignores them
        return {
            "seed_artists": ",".join(seeds.artist_ids),
            "seed_tracks": ",".join(seeds.track_ids),
            "seed_genres": ",".join(seeds.genres),
            "limit": limit,
        }

    def request_recommendations(self, seeds: "SeedSnapshot", token: str,
                                limit: Optional[int] = None) -> List[RecommendedTrack]:
        limit = limit if limit is not None else self._settings.recommendation_limit
        params = self.build_params(seeds, limit)
        logger.info(
            "Requesting %s recommendations (artists=%d, tracks=%d, genres=%d)",
            limit, len(seeds.artist_ids), len(seeds.track_ids), len(seeds.genres),
        )

        started = time.monotonic()
        try:
            response = self._session.get(
                self.endpoint,
                # Seed lists keep raw commas on the wire
                params=urlencode(params, safe=","),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._settings.http_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Recommendation request failed before a response was received: %s", exc)
            raise RecommendationError("Could not reach the Spotify recommendation endpoint.", detail=str(exc)) from exc
        finally:
            observe_upstream_latency("recommendations", time.monotonic() - started)

        if not 200 <= response.status_code < 300:
            logger.error(
                "Recommendation request failed: HTTP %s %s",
                response.status_code, response.text[:500],
            )
            raise RecommendationError(
                "Spotify could not generate recommendations.",
                detail=f"HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError("Recommendation response was not JSON.") from exc

        parsed = parse_response(RecommendationResponse, payload, what="recommendation")
        logger.info("Received %d recommended tracks", len(parsed.tracks))
        return parsed.tracks


__all__ = ["RecommendationRequester"]
