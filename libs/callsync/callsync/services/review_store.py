"""In-memory review collaborator (ids, timestamps, action log)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from callsync.models.qa import AnnotationRequest, QANote


@dataclass
class ReviewAction:
    call_id: str
    kind: str
    payload: dict[str, Any] = field(default_factory=dict)


class InMemoryReviewStore:
    def __init__(self, *, author: str | None = None) -> None:
        self._author = author
        self._notes: dict[str, list[QANote]] = {}
        self.actions: list[ReviewAction] = []

    @staticmethod
    def new_note_id() -> str:
        return f"note_{uuid.uuid4().hex[:12]}"

    def notes(self, call_id: str) -> list[QANote]:
        return list(self._notes.get(call_id, []))

    def create_note(self, call_id: str, request: AnnotationRequest) -> QANote:
        note = QANote(
            id=self.new_note_id(),
            text=request.text,
            transcript_entry_id=request.transcript_entry_id,
            created_at=datetime.now(tz=timezone.utc),
            category=request.category,
            created_by=self._author,
        )
        self._notes.setdefault(call_id, []).append(note)
        self.actions.append(ReviewAction(call_id, "note", {"note_id": note.id}))
        return note

    def update_criterion(self, call_id: str, criterion_id: str, score: int, comment: str | None) -> None:
        self.actions.append(
            ReviewAction(call_id, "criterion", {"criterion_id": criterion_id, "score": score, "comment": comment})
        )

    def submit_feedback(self, call_id: str, feedback: str) -> None:
        self.actions.append(ReviewAction(call_id, "feedback", {"feedback": feedback}))

    def complete_qa(self, call_id: str) -> None:
        self.actions.append(ReviewAction(call_id, "complete"))
