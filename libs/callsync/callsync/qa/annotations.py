"""Bind new QA notes to the transcript entry that is currently active."""

from __future__ import annotations

import logging
from collections.abc import Callable

from callsync.error_codes import ErrorCode
from callsync.exceptions import ConfigurationError
from callsync.models.qa import AnnotationRequest, NoteCategory, QANote, Rejected

logger = logging.getLogger(__name__)

CreateNoteFn = Callable[[AnnotationRequest], QANote]


class AnnotationBinding:
    """Note entry form state plus the rule for turning it into a note.

    A note needs non-blank text, an active transcript entry and a known
    category; otherwise the request is rejected and `create_note` is not called.
    """

    def __init__(
        self,
        create_note: CreateNoteFn,
        *,
        default_category: NoteCategory | str = NoteCategory.GENERAL,
    ) -> None:
        default = _coerce_category(default_category)
        if default is None:
            raise ConfigurationError(
                f"Unknown default note category: {default_category!r}",
                error_code=ErrorCode.UNKNOWN_NOTE_CATEGORY,
            )
        self._create_note = create_note
        self._default_category = default
        self.draft_text = ""
        self.draft_category: NoteCategory | str = default

    def set_draft(self, text: str, category: NoteCategory | str | None = None) -> None:
        self.draft_text = str(text or "")
        if category is not None:
            # checked on submit
            self.draft_category = _coerce_category(category) or category

    def reset_draft(self) -> None:
        self.draft_text = ""
        self.draft_category = self._default_category

    @staticmethod
    def can_submit(active_segment_id: str | None, text: str | None) -> bool:
        return bool(active_segment_id) and bool(str(text or "").strip())

    def create_annotation(
        self,
        active_segment_id: str | None,
        text: str | None,
        category: NoteCategory | str | None = None,
    ) -> QANote | Rejected:
        if not active_segment_id:
            return Rejected(ErrorCode.NO_ACTIVE_SEGMENT, "notes need an active transcript entry")
        cleaned = str(text or "").strip()
        if not cleaned:
            return Rejected(ErrorCode.EMPTY_NOTE_TEXT, "note text is empty")
        resolved = self._default_category if category is None else _coerce_category(category)
        if resolved is None:
            return Rejected(ErrorCode.UNKNOWN_NOTE_CATEGORY, f"unknown note category {category!r}")

        request = AnnotationRequest(
            text=cleaned,
            transcript_entry_id=active_segment_id,
            category=resolved,
        )
        note = self._create_note(request)
        logger.debug("note %s bound to transcript entry %s", note.id, active_segment_id)
        self.reset_draft()
        return note

    def submit_draft(self, active_segment_id: str | None) -> QANote | Rejected:
        return self.create_annotation(active_segment_id, self.draft_text, self.draft_category)


def _coerce_category(value: NoteCategory | str) -> NoteCategory | None:
    if isinstance(value, NoteCategory):
        return value
    try:
        return NoteCategory.parse(value)
    except ValueError:
        return None
