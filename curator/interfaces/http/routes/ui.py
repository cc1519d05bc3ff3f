"""Server-rendered curator page and its form handlers (post/redirect/get)."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Blueprint, redirect, render_template, request, url_for

from curator.domain.curation import ActionResult
from curator.interfaces.http.context import current_session, get_curation_service
from curator.interfaces.http.formatters import format_duration

logger = logging.getLogger(__name__)

ui_bp = Blueprint('ui_bp', __name__)


def _back(result: Optional[ActionResult] = None):
    if result is not None and not result.ok:
        logger.info("UI action failed: %s (%s)", result.message, result.error_code)
    return redirect(url_for('ui_bp.index'))


@ui_bp.app_template_filter('duration')
def _duration_filter(ms):
    return format_duration(ms)


@ui_bp.route('/', methods=['GET'])
def index():
    service = get_curation_service()
    sess = current_session()
    if 'q' in request.args:
        service.search_genres(sess, request.args.get('q'))
    state = sess.to_dict()
    seeds = sess.seeds.snapshot()
    tracks = list(sess.recommended_tracks)
    preview_count = service.settings.playlist_preview_count
    visible = tracks if sess.show_all_tracks else tracks[:preview_count]
    return render_template(
        'index.html',
        state=state,
        seeds=seeds,
        limit=sess.seeds.category_limit,
        full={kind: sess.seeds.is_full(kind) for kind in ("artist", "track", "genre")},
        displayed_genres=list(sess.displayed_genres),
        genre_search=sess.genre_search,
        tracks=visible,
        total_tracks=len(tracks),
        preview_count=preview_count,
        show_all=sess.show_all_tracks,
        dark_mode=sess.dark_mode,
    )


@ui_bp.route('/ui/artists', methods=['POST'])
def add_artist():
    sess = current_session()
    return _back(get_curation_service().add_artist(sess, request.form.get('link', '')))


@ui_bp.route('/ui/artists/<int:index>/remove', methods=['POST'])
def remove_artist(index):
    sess = current_session()
    return _back(get_curation_service().remove_artist(sess, index))


@ui_bp.route('/ui/tracks', methods=['POST'])
def add_track():
    sess = current_session()
    return _back(get_curation_service().add_track(sess, request.form.get('link', '')))


@ui_bp.route('/ui/tracks/<int:index>/remove', methods=['POST'])
def remove_track(index):
    sess = current_session()
    return _back(get_curation_service().remove_track(sess, index))


@ui_bp.route('/ui/genres/toggle', methods=['POST'])
def toggle_genre():
    sess = current_session()
    return _back(get_curation_service().toggle_genre(sess, request.form.get('name', '')))


@ui_bp.route('/ui/genres/remove', methods=['POST'])
def remove_genre():
    sess = current_session()
    return _back(get_curation_service().remove_genre(sess, request.form.get('name', '')))


@ui_bp.route('/ui/playlist', methods=['POST'])
def generate_playlist():
    sess = current_session()
    return _back(get_curation_service().generate_playlist(sess))


@ui_bp.route('/ui/playlist/show-all', methods=['POST'])
def toggle_show_all():
    sess = current_session()
    get_curation_service().toggle_show_all(sess)
    return _back()


@ui_bp.route('/ui/reset', methods=['POST'])
def reset():
    sess = current_session()
    return _back(get_curation_service().reset(sess))


@ui_bp.route('/ui/token', methods=['POST'])
def retry_token():
    sess = current_session()
    return _back(get_curation_service().retry_token(sess))


@ui_bp.route('/ui/theme', methods=['POST'])
def toggle_theme():
    sess = current_session()
    get_curation_service().toggle_dark_mode(sess)
    return _back()
