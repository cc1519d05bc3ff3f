import logging
import os

import pytest


@pytest.mark.unit
def test_configure_logging_creates_file_and_is_idempotent(tmp_path, monkeypatch):
    import app as app_module
    import config as cfg

    # Ensure console logs disabled for this test
    monkeypatch.setattr(cfg.Config, "ENABLE_CONSOLE_LOGS", False, raising=True)

    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level
    try:
        log_dir = tmp_path / "logs"
        path1 = app_module.configure_logging(str(log_dir))
        assert os.path.exists(path1)

        fhs = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(fhs) == 1
        assert os.path.abspath(fhs[0].baseFilename) == os.path.abspath(path1)

        # Second call replaces the file handler rather than adding another
        path2 = app_module.configure_logging(str(log_dir))
        fhs2 = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(fhs2) == 1
        assert os.path.exists(path2)
    finally:
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler) and handler not in old_handlers:
                handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


@pytest.mark.unit
def test_configure_logging_respects_console_toggle(tmp_path, monkeypatch):
    import app as app_module
    import config as cfg

    monkeypatch.setattr(cfg.Config, "ENABLE_CONSOLE_LOGS", True, raising=True)

    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level
    try:
        app_module.configure_logging(str(tmp_path / "logs"))
        sh = [h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler)]
        assert any(h.level == logging.WARNING for h in sh)
    finally:
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler) and handler not in old_handlers:
                handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


@pytest.mark.unit
def test_create_app_registers_blueprints_and_extensions():
    import app as app_module

    application = app_module.create_app()

    for bp in ("ui_bp", "session_bp", "seeds_bp", "genres_bp", "playlist_bp",
               "config_bp", "health_bp", "metrics_bp"):
        assert bp in application.blueprints

    service = application.extensions["curation_service"]
    assert service.registry is not None
    assert service.settings.recommendation_limit >= 1


@pytest.mark.unit
def test_create_app_uses_injected_service(app, service):
    assert app.extensions["curation_service"] is service


@pytest.mark.unit
def test_csp_header_is_applied(client):
    r = client.get('/api/config/public-config')
    assert "default-src 'self'" in r.headers['Content-Security-Policy']
