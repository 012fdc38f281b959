"""Playback/transcript synchronization."""

from callsync.sync.coordinator import PlaybackCoordinator
from callsync.sync.resolver import find_segment, find_segment_start_time, resolve_active_segment

__all__ = [
    "PlaybackCoordinator",
    "find_segment",
    "find_segment_start_time",
    "resolve_active_segment",
]
