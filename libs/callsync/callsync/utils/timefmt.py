"""Playback clock formatting."""

from __future__ import annotations

import math


def format_time(seconds: float | None) -> str:
    """Format a playback position as ``M:SS`` (minutes are not wrapped into hours)."""
    if seconds is None or not math.isfinite(float(seconds)) or seconds < 0:
        seconds = 0.0
    total_s = int(math.floor(float(seconds)))
    minutes, secs = divmod(total_s, 60)
    return f"{minutes}:{secs:02d}"
