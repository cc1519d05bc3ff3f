import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

# --- Import our configuration and the curation services ---
from config import Config
from curator.settings import load_app_settings
from curator.core import SessionRegistry
from curator.domain.catalog import GenreCatalog, MetadataResolver, RecommendationRequester, TokenProvider
from curator.domain.curation import CurationService
from curator.interfaces.http.routes import (
    config_bp,
    genres_bp,
    health_bp,
    playlist_bp,
    seeds_bp,
    session_bp,
    ui_bp,
)
from curator.observability import configure_structured_logging, metrics_blueprint


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_filename = f"log-{timestamp}"
    log_path = os.path.join(log_dir, log_filename)

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File: INFO and above
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # Console handler optional: keep backend console quiet unless explicitly enabled
    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        # If console logging is enabled, keep it concise: warnings and above
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    # Quiet Flask/Werkzeug own console handlers; let them propagate to root
    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def build_curation_service(settings=None) -> CurationService:
    """Wire the token, metadata and recommendation clients into one service."""
    settings = settings or load_app_settings()
    return CurationService(
        settings=settings,
        token_provider=TokenProvider(settings),
        metadata_resolver=MetadataResolver(settings),
        recommender=RecommendationRequester(settings),
        genre_catalog=GenreCatalog(),
        registry=SessionRegistry(idle_ttl_seconds=settings.session_idle_ttl),
    )


def create_app(curation_service=None):
    app = Flask(__name__, template_folder='curator/templates')
    app.config.from_object(Config)
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    allowed_origins = sorted({
        origin.strip()
        for origin in Config.CORS_ALLOWED_ORIGINS
        if origin and origin.strip() and origin.strip() != "*"
    })
    CORS(
        app,
        resources={r"/api/*": {"origins": allowed_origins}},
        supports_credentials=True,
    )

    csp_policy = app.config.get('CONTENT_SECURITY_POLICY')
    if csp_policy:

        @app.after_request
        def _apply_csp(response):
            response.headers.setdefault('Content-Security-Policy', csp_policy)
            return response

    # Build the curation service at the app boundary so routes stay thin
    service = curation_service or build_curation_service()
    app.extensions['curation_service'] = service
    if not service.settings.has_credentials:
        app.logger.warning(
            "Spotify client credentials missing; sessions will start without a token."
        )

    # --- Register Blueprints ---
    app.register_blueprint(ui_bp)
    app.register_blueprint(session_bp)
    app.register_blueprint(seeds_bp)
    app.register_blueprint(genres_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(config_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    # Configure logging:
    # - In debug with reloader: only in the child process to avoid duplicate files
    # - In non-debug: always configure here
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'log')
    if debug_mode:
        if os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
            log_file_path = configure_logging(log_dir)
            logger.info("File logging initialized at %s", log_file_path)
    else:
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    # Check API credentials at startup
    if not Config.SPOTIPY_CLIENT_ID or not Config.SPOTIPY_CLIENT_SECRET:
        logger.warning("Spotify API client ID or client secret not found in environment variables.")
        logger.warning("Please set SPOTIPY_CLIENT_ID and SPOTIPY_CLIENT_SECRET for full functionality.")

    app = create_app()
    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Starting Flask application...")
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=5000, threaded=True)
