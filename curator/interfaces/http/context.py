"""Per-request access to the curation service and the caller's session."""

from __future__ import annotations

from uuid import uuid4

from flask import current_app, g, jsonify, session

from curator.core import CurationSession
from curator.domain.curation import ActionResult, CurationService

SESSION_COOKIE_KEY = "curation_sid"

_STATUS_BY_CODE = {
    "validation_error": 400,
    "not_found": 404,
    "busy": 409,
    "stale": 409,
    "auth_error": 502,
    "recommendation_error": 502,
    "parse_error": 502,
    "internal_error": 500,
}


def get_curation_service() -> CurationService:
    return current_app.extensions["curation_service"]


def current_session() -> CurationSession:
    """Resolve (or start) the curation session bound to the Flask session cookie."""
    sid = session.get(SESSION_COOKIE_KEY)
    if not sid:
        sid = uuid4().hex
        session[SESSION_COOKIE_KEY] = sid
    g.curation_session_id = sid
    return get_curation_service().start_session(sid)


def status_for(result: ActionResult) -> int:
    if result.ok:
        return 200
    return _STATUS_BY_CODE.get(result.error_code or "", 400)


def respond(result: ActionResult):
    return jsonify(result.to_dict()), status_for(result)


__all__ = [
    "SESSION_COOKIE_KEY",
    "current_session",
    "get_curation_service",
    "respond",
    "status_for",
]
