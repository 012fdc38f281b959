"""Call detail model (the subset consumed by playback and review)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from callsync.models.transcript import TranscriptEntry, TranscriptMetadata, summarize_transcript


class CallStatus(str, Enum):
    PENDING = "pending"
    TRANSCRIBING = "transcribing"
    TRANSCRIBED = "transcribed"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    FAILED = "failed"
    NEW = "new"
    REVIEWED = "reviewed"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class AudioInfo:
    url: str
    duration: float  # seconds
    format: str = ""
    size: int = 0  # bytes


@dataclass
class CallDetail:
    id: str
    title: str
    date: str
    duration: float  # seconds
    agent_name: str = ""
    customer_name: str = ""
    status: CallStatus = CallStatus.PENDING
    audio: AudioInfo | None = None
    transcript: list[TranscriptEntry] = field(default_factory=list)

    @property
    def transcript_metadata(self) -> TranscriptMetadata:
        return summarize_transcript(self.transcript)
