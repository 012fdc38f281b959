"""Utility helpers."""

from callsync.utils.timefmt import format_time

__all__ = ["format_time"]
