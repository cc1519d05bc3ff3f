"""Playlist curator: seed collection and Spotify recommendation workflow."""

__version__ = "0.1.0"
