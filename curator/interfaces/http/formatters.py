"""Utility functions for formatting values in UI contexts."""

from __future__ import annotations

from typing import Optional


def format_duration(ms: Optional[int]) -> str:
    """Render a track length as ``m:ss``.

    Missing durations yield an empty string. Seconds are rounded, and a
    rounded value of 60 carries into the minutes.
    """

    if ms is None:
        return ""
    total_seconds = int(round(ms / 1000))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
