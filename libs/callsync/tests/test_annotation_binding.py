from __future__ import annotations

from datetime import datetime, timezone

import pytest

from callsync.error_codes import ErrorCode
from callsync.exceptions import ConfigurationError
from callsync.models.qa import AnnotationRequest, NoteCategory, QANote, Rejected
from callsync.qa.annotations import AnnotationBinding
from callsync.sync.coordinator import PlaybackCoordinator
from callsync.models.transcript import SpeakerRole, TranscriptEntry, Word


class _Recorder:
    def __init__(self) -> None:
        self.requests: list[AnnotationRequest] = []

    def __call__(self, request: AnnotationRequest) -> QANote:
        self.requests.append(request)
        return QANote(
            id=f"n{len(self.requests)}",
            text=request.text,
            transcript_entry_id=request.transcript_entry_id,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            category=request.category,
        )


def test_rejects_without_active_segment() -> None:
    recorder = _Recorder()
    binding = AnnotationBinding(recorder)
    result = binding.create_annotation(None, "some text", "general")
    assert isinstance(result, Rejected)
    assert result.reason is ErrorCode.NO_ACTIVE_SEGMENT
    assert recorder.requests == []


def test_rejects_blank_text() -> None:
    recorder = _Recorder()
    binding = AnnotationBinding(recorder)
    result = binding.create_annotation("seg-1", "   ", "general")
    assert isinstance(result, Rejected)
    assert result.reason is ErrorCode.EMPTY_NOTE_TEXT
    assert recorder.requests == []


def test_forwards_trimmed_text_and_clears_draft() -> None:
    recorder = _Recorder()
    binding = AnnotationBinding(recorder)
    binding.set_draft("  Great empathy here  ", NoteCategory.POSITIVE)

    note = binding.submit_draft("seg-2")
    assert isinstance(note, QANote)
    assert recorder.requests == [
        AnnotationRequest(text="Great empathy here", transcript_entry_id="seg-2", category=NoteCategory.POSITIVE)
    ]
    assert binding.draft_text == ""
    assert binding.draft_category is NoteCategory.GENERAL


def test_rejected_draft_is_kept() -> None:
    binding = AnnotationBinding(_Recorder())
    binding.set_draft("keep me", "suggestion")
    assert isinstance(binding.submit_draft(None), Rejected)
    assert binding.draft_text == "keep me"
    assert binding.draft_category is NoteCategory.SUGGESTION


def test_note_keeps_segment_after_playback_moves() -> None:
    transcript = [
        TranscriptEntry("a", "s", "S", SpeakerRole.AGENT, "a", words=(Word("a", 0.0, 4.0),)),
        TranscriptEntry("b", "s", "S", SpeakerRole.AGENT, "b", words=(Word("b", 4.5, 9.0),)),
    ]
    coordinator = PlaybackCoordinator(transcript)
    coordinator.load_metadata(10.0)
    coordinator.time_update(2.0)

    binding = AnnotationBinding(_Recorder())
    note = binding.create_annotation(coordinator.active_segment_id, "Greeting skipped", NoteCategory.NEGATIVE)
    coordinator.time_update(6.0)

    assert isinstance(note, QANote)
    assert note.transcript_entry_id == "a"
    assert coordinator.active_segment_id == "b"


def test_can_submit() -> None:
    assert AnnotationBinding.can_submit("seg", "text") is True
    assert AnnotationBinding.can_submit(None, "text") is False
    assert AnnotationBinding.can_submit("seg", " \n") is False


def test_unknown_category_is_rejected() -> None:
    recorder = _Recorder()
    binding = AnnotationBinding(recorder)
    binding.set_draft("Escalation handled late", "praise")

    result = binding.submit_draft("seg-1")
    assert isinstance(result, Rejected)
    assert result.reason is ErrorCode.UNKNOWN_NOTE_CATEGORY
    assert recorder.requests == []
    assert binding.draft_text == "Escalation handled late"

    note = binding.create_annotation("seg-1", "Escalation handled late", " Suggestion ")
    assert isinstance(note, QANote)
    assert note.category is NoteCategory.SUGGESTION


def test_unknown_default_category_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc:
        AnnotationBinding(_Recorder(), default_category="praise")
    assert exc.value.error_code is ErrorCode.UNKNOWN_NOTE_CATEGORY
