# curator/domain/catalog/metadata_resolver.py
import logging
import time
from typing import Any, Callable, Optional

import requests
import spotipy
from spotipy.exceptions import SpotifyException

from curator.errors import AuthError, NotFoundError
from curator.models import EntityName, parse_response
from curator.observability.metrics import observe_upstream_latency
from curator.settings import AppSettings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


class MetadataResolver:
    def __init__(self, settings: AppSettings, client_factory: Optional[ClientFactory] = None,
                 requests_session: Optional[requests.Session] = None):
        """Resolves artist/track ids to display names for seed chips.

        ``client_factory`` builds a Spotipy-compatible client for a bearer
        token; tests inject a stub. Each resolution is a fresh request.
        """
        self._settings = settings
        self._requests_session = requests_session
        self._client_factory = client_factory or self._build_client

    def _build_client(self, token: str) -> spotipy.Spotify:
        client = spotipy.Spotify(
            auth=token,
            requests_session=self._requests_session or True,
            requests_timeout=self._settings.http_timeout,
            retries=0,
            status_retries=0,
        )
        client.prefix = self._settings.api_base_url + "/"
        return client

    def _lookup(self, kind: str, entity_id: str, token: str) -> EntityName:
        client = self._client_factory(token)
        call = client.artist if kind == "artist" else client.track
        started = time.monotonic()
        try:
            payload = call(entity_id)
        except SpotifyException as exc:
            status = exc.http_status
            logger.warning("Spotify %s lookup for %s failed with HTTP %s: %s", kind, entity_id, status, exc.msg)
            if status in (401, 403):
                raise AuthError(
                    "Spotify rejected the access token.",
                    detail=f"HTTP {status}",
                    status_code=status,
                ) from exc
            raise NotFoundError(
                f"Could not find a Spotify {kind} with id '{entity_id}'.",
                detail=f"HTTP {status}",
                status_code=status,
            ) from exc
        except requests.RequestException as exc:
            logger.error("Spotify %s lookup for %s failed: %s", kind, entity_id, exc)
            raise NotFoundError(
                f"Could not look up Spotify {kind} '{entity_id}'.",
                detail=str(exc),
            ) from exc
        finally:
            observe_upstream_latency(kind, time.monotonic() - started)

        if not payload:
            raise NotFoundError(f"Could not find a Spotify {kind} with id '{entity_id}'.")
        return parse_response(EntityName, payload, what=f"{kind} metadata")

    def resolve_artist(self, artist_id: str, token: str) -> EntityName:
        """ Fetches the display name of an artist. """
        return self._lookup("artist", artist_id, token)

    def resolve_track(self, track_id: str, token: str) -> EntityName:
        """ Fetches the display name of a track. """
        return self._lookup("track", track_id, token)


__all__ = ["MetadataResolver"]
