from __future__ import annotations

from typing import Optional

from flask import Blueprint, Response
from prometheus_client import Counter, Gauge, Histogram, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

SEED_ADDITIONS = Counter(
    "curator_seed_additions_total",
    "Seed add attempts by kind (artist/track/genre) and result.",
    ["kind", "result"],
)
RECOMMENDATION_REQUESTS = Counter(
    "curator_recommendation_requests_total",
    "Playlist generation attempts by result.",
    ["result"],
)
TOKEN_EXCHANGES = Counter(
    "curator_token_exchanges_total",
    "Client-credentials token exchanges by result.",
    ["result"],
)
UPSTREAM_LATENCY = Histogram(
    "curator_spotify_request_seconds",
    "Latency of Spotify Web API calls.",
    ["endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, float("inf")),
)
ACTIVE_SESSIONS = Gauge(
    "curator_active_sessions",
    "Number of curation sessions held in memory.",
)


def record_seed_addition(kind: str, result: str) -> None:
    SEED_ADDITIONS.labels(kind=kind, result=result).inc()


def record_recommendation(result: str) -> None:
    RECOMMENDATION_REQUESTS.labels(result=result).inc()


def record_token_exchange(result: str) -> None:
    TOKEN_EXCHANGES.labels(result=result).inc()


def observe_upstream_latency(endpoint: str, duration_seconds: Optional[float]) -> None:
    if duration_seconds is not None:
        UPSTREAM_LATENCY.labels(endpoint=endpoint).observe(duration_seconds)


def update_session_gauge(count: int) -> None:
    ACTIVE_SESSIONS.set(max(0, count))


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
