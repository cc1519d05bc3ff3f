import logging

from flask import Blueprint, jsonify, request

from curator.interfaces.http.context import current_session, get_curation_service, respond

logger = logging.getLogger(__name__)

seeds_bp = Blueprint('seeds_bp', __name__, url_prefix='/api/seeds')


def _payload_value(*keys: str) -> str:
    data = request.get_json(silent=True) or {}
    for key in keys:
        value = data.get(key)
        if value is None:
            value = request.form.get(key)
        if value:
            return str(value)
    return ""


@seeds_bp.route('', methods=['GET'])
def list_seeds():
    sess = current_session()
    return jsonify(sess.seeds.snapshot().to_dict()), 200


@seeds_bp.route('/artists', methods=['POST'])
def add_artist():
    link = _payload_value('link', 'spotify_link')
    sess = current_session()
    try:
        result = get_curation_service().add_artist(sess, link)
    except Exception as e:
        logger.error("Unexpected error adding artist %r: %s", link, e, exc_info=True)
        return jsonify({"status": "error", "error_code": "internal_error", "message": "Failed to add artist."}), 500
    return respond(result)


@seeds_bp.route('/artists/<int:index>', methods=['DELETE'])
def remove_artist(index):
    sess = current_session()
    return respond(get_curation_service().remove_artist(sess, index))


@seeds_bp.route('/tracks', methods=['POST'])
def add_track():
    link = _payload_value('link', 'spotify_link')
    sess = current_session()
    try:
        result = get_curation_service().add_track(sess, link)
    except Exception as e:
        logger.error("Unexpected error adding track %r: %s", link, e, exc_info=True)
        return jsonify({"status": "error", "error_code": "internal_error", "message": "Failed to add track."}), 500
    return respond(result)


@seeds_bp.route('/tracks/<int:index>', methods=['DELETE'])
def remove_track(index):
    sess = current_session()
    return respond(get_curation_service().remove_track(sess, index))


@seeds_bp.route('/genres', methods=['POST'])
def toggle_genre():
    name = _payload_value('name', 'genre')
    sess = current_session()
    return respond(get_curation_service().toggle_genre(sess, name))


@seeds_bp.route('/genres/<string:name>', methods=['DELETE'])
def remove_genre(name):
    sess = current_session()
    return respond(get_curation_service().remove_genre(sess, name))
