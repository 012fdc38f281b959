"""QA review workflow for one call (notes, criterion scores, feedback, completion)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Protocol

from callsync.config import QAConfig
from callsync.error_codes import ErrorCode
from callsync.exceptions import QAReviewError
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
from callsync.qa.annotations import AnnotationBinding

logger = logging.getLogger(__name__)


class ReviewSink(Protocol):
    """Collaborator that persists review actions."""

    def create_note(self, call_id: str, request: AnnotationRequest) -> QANote: ...

    def update_criterion(self, call_id: str, criterion_id: str, score: int, comment: str | None) -> None: ...

    def submit_feedback(self, call_id: str, feedback: str) -> None: ...

    def complete_qa(self, call_id: str) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def weighted_score(criteria: Sequence[QACriterion], evaluations: Sequence[CriterionEvaluation]) -> float:
    """Weight-averaged score over evaluated criteria; 0.0 when nothing is weighted."""
    weights = {c.id: float(c.weight) for c in criteria}
    total_weight = 0.0
    total = 0.0
    for evaluation in evaluations:
        weight = weights.get(evaluation.criterion_id)
        if not weight or weight <= 0:
            continue
        total_weight += weight
        total += weight * float(evaluation.score)
    if total_weight <= 0:
        return 0.0
    return total / total_weight


class QAReview:
    def __init__(
        self,
        qa_data: QAData,
        criteria: Sequence[QACriterion],
        sink: ReviewSink,
        *,
        config: QAConfig | None = None,
    ) -> None:
        self._data = qa_data
        self._criteria = {c.id: c for c in criteria}
        self._sink = sink
        self._config = config or QAConfig()
        self.annotations = AnnotationBinding(
            self._create_note,
            default_category=self._config.default_note_category,
        )

    @property
    def data(self) -> QAData:
        return self._data

    @property
    def criteria(self) -> list[QACriterion]:
        return list(self._criteria.values())

    @property
    def is_completed(self) -> bool:
        return self._data.status is QAStatus.COMPLETED

    def _ensure_open(self) -> None:
        if self.is_completed:
            raise QAReviewError(
                self._data.call_id,
                "review is already completed",
                error_code=ErrorCode.QA_COMPLETED,
            )

    def _mark_in_progress(self) -> None:
        if self._data.status is QAStatus.PENDING:
            self._data.status = QAStatus.IN_PROGRESS

    def _create_note(self, request: AnnotationRequest) -> QANote:
        note = self._sink.create_note(self._data.call_id, request)
        self._data.notes.append(note)
        self._mark_in_progress()
        return note

    def add_note(
        self,
        active_segment_id: str | None,
        text: str | None,
        category: NoteCategory | str | None = None,
    ) -> QANote | Rejected:
        self._ensure_open()
        return self.annotations.create_annotation(active_segment_id, text, category)

    def notes_for_segment(self, segment_id: str) -> list[QANote]:
        return [n for n in self._data.notes if n.transcript_entry_id == segment_id]

    def update_criterion_score(self, criterion_id: str, score: int, comment: str | None = None) -> CriterionEvaluation:
        self._ensure_open()
        if criterion_id not in self._criteria:
            raise QAReviewError(
                self._data.call_id,
                f"unknown criterion {criterion_id!r}",
                error_code=ErrorCode.UNKNOWN_CRITERION,
            )
        lo, hi = int(self._config.min_score), int(self._config.max_score)
        if isinstance(score, bool) or not isinstance(score, int) or not lo <= score <= hi:
            raise QAReviewError(
                self._data.call_id,
                f"score for {criterion_id!r} must be an integer in [{lo}, {hi}], got {score!r}",
                error_code=ErrorCode.INVALID_SCORE,
            )

        # persisted before the local review changes
        self._sink.update_criterion(self._data.call_id, criterion_id, int(score), comment)
        evaluation = self._data.evaluation_for(criterion_id)
        if evaluation is None:
            evaluation = CriterionEvaluation(criterion_id=criterion_id, score=int(score), comment=comment)
            self._data.criteria_evaluations.append(evaluation)
        else:
            evaluation.score = int(score)
            evaluation.comment = comment
        self._data.score = self.overall_score()
        self._mark_in_progress()
        return evaluation

    def overall_score(self) -> float:
        return weighted_score(list(self._criteria.values()), self._data.criteria_evaluations)

    def submit_feedback(self, feedback: str | None) -> bool:
        self._ensure_open()
        cleaned = str(feedback or "").strip()
        if not cleaned:
            logger.debug("blank feedback ignored for call %s", self._data.call_id)
            return False
        self._sink.submit_feedback(self._data.call_id, cleaned)
        self._data.feedback = cleaned
        self._mark_in_progress()
        return True

    def complete(self, *, evaluated_by: str | None = None, at: datetime | None = None) -> bool:
        if self.is_completed:
            return False
        self._sink.complete_qa(self._data.call_id)
        self._data.status = QAStatus.COMPLETED
        self._data.evaluated_by = evaluated_by or self._data.evaluated_by
        self._data.evaluated_at = at or _utcnow()
        logger.info("qa review completed for call %s (score=%.2f)", self._data.call_id, self._data.score)
        return True
