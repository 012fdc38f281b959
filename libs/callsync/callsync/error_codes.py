"""Canonical error codes surfaced to callers and UI surfaces."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN = "UNKNOWN"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"

    NO_ACTIVE_SEGMENT = "NO_ACTIVE_SEGMENT"
    EMPTY_NOTE_TEXT = "EMPTY_NOTE_TEXT"
    UNKNOWN_NOTE_CATEGORY = "UNKNOWN_NOTE_CATEGORY"

    INVALID_SCORE = "INVALID_SCORE"
    UNKNOWN_CRITERION = "UNKNOWN_CRITERION"
    QA_COMPLETED = "QA_COMPLETED"

    UNSUPPORTED_PLAYBACK_RATE = "UNSUPPORTED_PLAYBACK_RATE"
