"""Core data models for callsync."""

from callsync.models.call import AudioInfo, CallDetail, CallStatus
from callsync.models.playback import PlaybackPhase, PlaybackState
from callsync.models.qa import (
    AnnotationRequest,
    CriterionEvaluation,
    NoteCategory,
    QACriterion,
    QAData,
    QANote,
    QAStatus,
    Rejected,
)
from callsync.models.transcript import (
    SpeakerRole,
    Transcript,
    TranscriptEntry,
    TranscriptMetadata,
    Word,
    summarize_transcript,
)

__all__ = [
    "AnnotationRequest",
    "AudioInfo",
    "CallDetail",
    "CallStatus",
    "CriterionEvaluation",
    "NoteCategory",
    "PlaybackPhase",
    "PlaybackState",
    "QACriterion",
    "QAData",
    "QANote",
    "QAStatus",
    "Rejected",
    "SpeakerRole",
    "Transcript",
    "TranscriptEntry",
    "TranscriptMetadata",
    "Word",
    "summarize_transcript",
]
