"""Quality-assurance review models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from callsync.error_codes import ErrorCode


class NoteCategory(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    SUGGESTION = "suggestion"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: str | None) -> NoteCategory:
        """Parse a category; missing values fall back to `general`."""

        normalized = str(value or "").strip().lower()
        if not normalized:
            return cls.GENERAL
        return cls(normalized)


class QAStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class QACriterion:
    id: str
    name: str
    description: str = ""
    category: str = ""
    weight: float = 0.0  # share of the overall score, 0-100


@dataclass
class CriterionEvaluation:
    criterion_id: str
    score: int
    comment: str | None = None


@dataclass(frozen=True)
class QANote:
    """A note pinned to the transcript entry that was active when it was written."""

    id: str
    text: str
    transcript_entry_id: str
    created_at: datetime
    category: NoteCategory = NoteCategory.GENERAL
    created_by: str | None = None


@dataclass(frozen=True)
class AnnotationRequest:
    """Payload handed to the collaborator that persists notes."""

    text: str
    transcript_entry_id: str
    category: NoteCategory


@dataclass(frozen=True)
class Rejected:
    """Returned instead of a note when the request cannot be bound to a segment."""

    reason: ErrorCode
    message: str = ""


@dataclass
class QAData:
    call_id: str
    score: float = 0.0
    status: QAStatus = QAStatus.PENDING
    evaluated_by: str | None = None
    evaluated_at: datetime | None = None
    criteria_evaluations: list[CriterionEvaluation] = field(default_factory=list)
    notes: list[QANote] = field(default_factory=list)
    feedback: str | None = None

    def evaluation_for(self, criterion_id: str) -> CriterionEvaluation | None:
        for evaluation in self.criteria_evaluations:
            if evaluation.criterion_id == criterion_id:
                return evaluation
        return None
