"""Map playback time to the transcript entry being spoken (and back).

Two passes over the transcript, in order:
- containment: the first timed entry whose [first word start, last word end]
  contains the time wins, so overlapping entries resolve to the earlier one.
- fallback: otherwise the timed entry whose midpoint is closest to the time;
  ties keep the earliest entry.

Entries without word timings are never active.
"""

from __future__ import annotations

import math

from callsync.models.transcript import Transcript, TranscriptEntry


def resolve_active_segment(transcript: Transcript | None, time: float | None) -> str | None:
    if not transcript or time is None:
        return None

    for entry in transcript:
        if not entry.words:
            continue
        if entry.words[0].start_time <= time <= entry.words[-1].end_time:
            return entry.id

    closest: str | None = None
    smallest_diff = math.inf
    for entry in transcript:
        if not entry.words:
            continue
        midpoint = (entry.words[0].start_time + entry.words[-1].end_time) / 2
        diff = abs(midpoint - time)
        if diff < smallest_diff:
            smallest_diff = diff
            closest = entry.id
    return closest


def find_segment(transcript: Transcript | None, segment_id: str) -> TranscriptEntry | None:
    for entry in transcript or ():
        if entry.id == segment_id:
            return entry
    return None


def find_segment_start_time(transcript: Transcript | None, segment_id: str) -> float | None:
    """Start of the entry's first word, or None for unknown/untimed entries."""
    entry = find_segment(transcript, segment_id)
    if entry is None or not entry.words:
        return None
    return float(entry.words[0].start_time)
