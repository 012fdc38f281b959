"""Transcript timing models (words and speaker turns)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class SpeakerRole(str, Enum):
    AGENT = "agent"
    CUSTOMER = "customer"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Word:
    text: str
    start_time: float  # seconds
    end_time: float  # seconds
    confidence: float | None = None


@dataclass(frozen=True)
class TranscriptEntry:
    """One speaker turn; word timings are optional."""

    id: str
    speaker_id: str
    speaker_name: str
    speaker_role: SpeakerRole
    text: str
    confidence: float | None = None
    words: tuple[Word, ...] = field(default_factory=tuple)

    @property
    def has_timing(self) -> bool:
        return bool(self.words)

    @property
    def start_time(self) -> float | None:
        if not self.words:
            return None
        return float(self.words[0].start_time)

    @property
    def end_time(self) -> float | None:
        if not self.words:
            return None
        return float(self.words[-1].end_time)

    @property
    def midpoint(self) -> float | None:
        if not self.words:
            return None
        return (float(self.words[0].start_time) + float(self.words[-1].end_time)) / 2


Transcript = Sequence[TranscriptEntry]


@dataclass(frozen=True)
class TranscriptMetadata:
    available: bool
    segment_count: int
    word_count: int
    engine: str | None = None
    confidence: float | None = None


def summarize_transcript(transcript: Transcript | None, *, engine: str | None = None) -> TranscriptMetadata:
    """Build transcript metadata; confidence is the mean over words that carry one."""
    entries = list(transcript or [])
    word_count = sum(len(e.words) for e in entries)
    scores = [float(w.confidence) for e in entries for w in e.words if w.confidence is not None]
    confidence = sum(scores) / len(scores) if scores else None
    return TranscriptMetadata(
        available=bool(entries),
        segment_count=len(entries),
        word_count=word_count,
        engine=engine,
        confidence=confidence,
    )
