import logging

from flask import Blueprint, jsonify, session

from curator.interfaces.http.context import SESSION_COOKIE_KEY, current_session, get_curation_service, respond

logger = logging.getLogger(__name__)

session_bp = Blueprint('session_bp', __name__, url_prefix='/api')


@session_bp.route('/session', methods=['GET'])
def get_session_state():
    try:
        sess = current_session()
        return jsonify(sess.to_dict()), 200
    except Exception as e:
        logger.error("Error loading session state: %s", e, exc_info=True)
        return jsonify({"status": "error", "error_code": "internal_error", "message": "Failed to load session."}), 500


@session_bp.route('/session/token', methods=['POST'])
def retry_token():
    """Re-run the client-credentials exchange after an earlier failure."""
    sess = current_session()
    return respond(get_curation_service().retry_token(sess))


@session_bp.route('/session/reset', methods=['POST'])
def reset_session():
    sess = current_session()
    return respond(get_curation_service().reset(sess))


@session_bp.route('/session', methods=['DELETE'])
def end_session():
    """Forget the caller's session; the next request starts a fresh one."""
    sid = session.pop(SESSION_COOKIE_KEY, None)
    ended = bool(sid) and get_curation_service().end_session(sid)
    return jsonify({"status": "success", "ended": ended}), 200
