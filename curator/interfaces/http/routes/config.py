import logging

from flask import Blueprint, jsonify

from curator.interfaces.http.context import get_curation_service

logger = logging.getLogger(__name__)

config_bp = Blueprint('config_bp', __name__, url_prefix='/api')


@config_bp.route('/config/public-config', methods=['GET'])
def get_public_config():
    """Expose the seed and playlist limits for frontend gating."""
    settings = get_curation_service().settings
    payload = {
        'seedCategoryLimit': settings.seed_category_limit,
        'maxTotalSeeds': settings.max_total_seeds,
        'recommendationLimit': settings.recommendation_limit,
        'genreSampleSize': settings.genre_sample_size,
        'credentialsConfigured': settings.has_credentials,
    }
    return jsonify(payload), 200
