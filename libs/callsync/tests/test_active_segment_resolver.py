from __future__ import annotations

from callsync.models.transcript import SpeakerRole, TranscriptEntry, Word
from callsync.sync.resolver import find_segment, find_segment_start_time, resolve_active_segment


def _entry(entry_id: str, start: float | None = None, end: float | None = None) -> TranscriptEntry:
    words: tuple[Word, ...] = ()
    if start is not None and end is not None:
        mid = (start + end) / 2
        words = (Word("a", start, mid), Word("b", mid, end))
    return TranscriptEntry(
        id=entry_id,
        speaker_id="s",
        speaker_name="Speaker",
        speaker_role=SpeakerRole.AGENT,
        text=entry_id,
        words=words,
    )


def test_resolve_empty_transcript_or_missing_time_is_none() -> None:
    transcript = [_entry("a", 0.0, 10.0)]
    assert resolve_active_segment([], 3.0) is None
    assert resolve_active_segment(None, 3.0) is None
    assert resolve_active_segment(transcript, None) is None


def test_resolve_containment_and_boundary_prefers_earlier_entry() -> None:
    transcript = [_entry("e1", 0.0, 5.0), _entry("e2", 5.0, 12.0)]
    assert resolve_active_segment(transcript, 3.0) == "e1"
    assert resolve_active_segment(transcript, 5.0) == "e1"
    assert resolve_active_segment(transcript, 8.0) == "e2"
    assert resolve_active_segment(transcript, 12.0) == "e2"


def test_resolve_falls_back_to_closest_midpoint() -> None:
    transcript = [_entry("A", 0.0, 10.0), _entry("B", 20.0, 30.0)]
    assert resolve_active_segment(transcript, 14.0) == "A"
    assert resolve_active_segment(transcript, 16.0) == "B"
    assert resolve_active_segment(transcript, 100.0) == "B"


def test_resolve_fallback_tie_keeps_first_entry() -> None:
    transcript = [_entry("A", 0.0, 10.0), _entry("B", 20.0, 30.0)]
    # Midpoints 5 and 25 are both 10s away from 15.
    assert resolve_active_segment(transcript, 15.0) == "A"


def test_resolve_overlap_first_match_wins() -> None:
    transcript = [_entry("long", 0.0, 20.0), _entry("inner", 5.0, 8.0)]
    assert resolve_active_segment(transcript, 6.0) == "long"


def test_resolve_skips_untimed_entries() -> None:
    transcript = [_entry("untimed"), _entry("timed", 10.0, 12.0)]
    assert resolve_active_segment(transcript, 0.0) == "timed"
    assert resolve_active_segment([_entry("x"), _entry("y")], 1.0) is None


def test_resolve_is_deterministic() -> None:
    transcript = [_entry("e1", 0.0, 5.0), _entry("e2", 6.0, 12.0), _entry("e3")]
    for t in (0.0, 5.5, 5.6, 11.9, 40.0):
        assert resolve_active_segment(transcript, t) == resolve_active_segment(transcript, t)


def test_find_segment_start_time() -> None:
    transcript = [_entry("e1", 1.5, 5.0), _entry("untimed")]
    assert find_segment_start_time(transcript, "e1") == 1.5
    assert find_segment_start_time(transcript, "untimed") is None
    assert find_segment_start_time(transcript, "missing") is None
    assert find_segment(transcript, "untimed") is transcript[1]
