"""Playlist generation routes."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from curator.interfaces.http.context import current_session, get_curation_service, respond

logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlist')


@playlist_bp.route('', methods=['POST'])
def generate_playlist():
    data = request.get_json(silent=True) or {}
    limit = None
    if data.get('limit') is not None:
        try:
            limit = max(1, min(int(data['limit']), 100))
        except (TypeError, ValueError):
            return jsonify({"status": "error", "error_code": "validation_error", "message": "limit must be an integer."}), 400

    sess = current_session()
    try:
        result = get_curation_service().generate_playlist(sess, limit=limit)
    except Exception as e:
        logger.error("Unexpected error generating playlist: %s", e, exc_info=True)
        return jsonify({"status": "error", "error_code": "internal_error", "message": "Failed to generate playlist."}), 500
    return respond(result)


@playlist_bp.route('', methods=['GET'])
def get_playlist():
    sess = current_session()
    state = sess.to_dict()
    return jsonify({
        "playlist_generated": state["playlist_generated"],
        "tracks": state["tracks"],
    }), 200
