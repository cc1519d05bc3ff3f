import base64
import logging
import time
from typing import Optional

import requests

from curator.errors import AuthError, ParseError
from curator.models import TokenResponse, parse_response
from curator.observability.metrics import observe_upstream_latency, record_token_exchange
from curator.settings import AppSettings

logger = logging.getLogger(__name__)


class TokenProvider:
    """Exchanges the app's client credentials for a bearer token.

    A single POST per call; the caller decides what to do with a failure.
    Nothing is cached here.
    """

    def __init__(self, settings: AppSettings, session: Optional[requests.Session] = None):
        self._settings = settings
        self._session = session or requests.Session()

    def _basic_auth_header(self) -> str:
        raw = f"{self._settings.spotify_client_id}:{self._settings.spotify_client_secret}"
        return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")

    def fetch_token(self) -> str:
        if not self._settings.has_credentials:
            record_token_exchange("missing_credentials")
            raise AuthError("Spotify client credentials are not configured.")

        started = time.monotonic()
        try:
            response = self._session.post(
                self._settings.auth_url,
                data={"grant_type": "client_credentials"},
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": self._basic_auth_header(),
                },
                timeout=self._settings.http_timeout,
            )
        except requests.RequestException as exc:
            record_token_exchange("network_error")
            logger.error("Token exchange failed before a response was received: %s", exc)
            raise AuthError("Could not reach the Spotify token endpoint.", detail=str(exc)) from exc
        finally:
            observe_upstream_latency("token", time.monotonic() - started)

        if not 200 <= response.status_code < 300:
            record_token_exchange("rejected")
            logger.warning("Token exchange rejected with HTTP %s", response.status_code)
            raise AuthError(
                "Spotify rejected the client credentials.",
                detail=f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            record_token_exchange("malformed")
            raise ParseError("Token response was not JSON.") from exc
        try:
            token = parse_response(TokenResponse, payload, what="token")
        except ParseError:
            record_token_exchange("malformed")
            raise

        record_token_exchange("success")
        logger.info("Obtained Spotify app token (expires_in=%s)", token.expires_in)
        return token.access_token


__all__ = ["TokenProvider"]
