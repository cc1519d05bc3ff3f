from flask import Blueprint, jsonify, request

from curator.interfaces.http.context import current_session, get_curation_service

genres_bp = Blueprint('genres_bp', __name__, url_prefix='/api')


@genres_bp.route('/genres', methods=['GET'])
def search_genres():
    term = request.args.get('q', '')
    sess = current_session()
    genres = get_curation_service().search_genres(sess, term)
    selected = list(sess.seeds.snapshot().genres)
    return jsonify({"genres": genres, "selected": selected, "query": term.strip()}), 200
