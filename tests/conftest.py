import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'curator' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Ensure a clean env for tests: fake credentials, no real endpoints."""
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "test-client-secret")
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)
    yield


@pytest.fixture
def settings():
    from curator.settings import load_app_settings

    return load_app_settings({
        "spotify_client_id": "test-client-id",
        "spotify_client_secret": "test-client-secret",
        "auth_url": "https://accounts.example.test/api/token",
        "api_base_url": "https://api.example.test/v1",
        "http_timeout": 5,
        "seed_category_limit": 5,
        "max_total_seeds": 5,
        "recommendation_limit": 10,
        "genre_sample_size": 10,
        "playlist_preview_count": 5,
        "session_idle_ttl": 3600,
    })


@pytest.fixture
def resolver():
    return test_stubs.StubResolver()


@pytest.fixture
def token_provider():
    return test_stubs.StubTokenProvider()


@pytest.fixture
def recommender():
    return test_stubs.StubRecommender(tracks=[test_stubs.make_track(f"Song {i}") for i in range(7)])


@pytest.fixture
def service(settings, token_provider, resolver, recommender):
    from curator.domain.catalog import GenreCatalog
    from curator.domain.curation import CurationService

    return CurationService(
        settings=settings,
        token_provider=token_provider,
        metadata_resolver=resolver,
        recommender=recommender,
        genre_catalog=GenreCatalog(),
    )


@pytest.fixture
def app(service):
    import app as app_module

    application = app_module.create_app(curation_service=service)
    application.config.update(TESTING=True)
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()
