from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from curator.observability.metrics import update_session_gauge

health_bp = Blueprint("health_bp", __name__)


def _session_count() -> int:
    service = current_app.extensions.get("curation_service")
    if service is None:
        return 0
    return len(service.registry)


@health_bp.route("/healthz")
def healthz():
    service = current_app.extensions.get("curation_service")
    checks = {
        "curation_service": "ok" if service is not None else "unavailable",
        "spotify_credentials": "ok" if service is not None and service.settings.has_credentials else "missing",
        "sessions": _session_count(),
    }
    status = 200 if service is not None else 503
    overall = "ok" if status == 200 else "degraded"
    return jsonify({"status": overall, "checks": checks}), status


@health_bp.route("/readyz")
def readyz():
    count = _session_count()
    update_session_gauge(count)
    service = current_app.extensions.get("curation_service")
    require_credentials = bool(current_app.config.get("READINESS_REQUIRE_CREDENTIALS", True))
    credentials = service is not None and service.settings.has_credentials
    ready = service is not None and (credentials or not require_credentials)
    payload = {
        "status": "ready" if ready else "blocked",
        "credentials_configured": credentials,
        "sessions": count,
    }
    return jsonify(payload), 200 if ready else 503
