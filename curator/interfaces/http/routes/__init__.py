"""Route blueprints exposed via Flask."""

from .config import config_bp
from .genres import genres_bp
from .health import health_bp
from .playlist import playlist_bp
from .seeds import seeds_bp
from .session import session_bp
from .ui import ui_bp

__all__ = [
    "config_bp",
    "genres_bp",
    "health_bp",
    "playlist_bp",
    "seeds_bp",
    "session_bp",
    "ui_bp",
]
