"""callsync exception hierarchy."""

from __future__ import annotations

from callsync.error_codes import ErrorCode


class CallSyncError(Exception):
    """Base error for callsync."""


class ConfigurationError(CallSyncError):
    """Raised when configuration or inputs are invalid."""

    def __init__(self, message: str, *, error_code: ErrorCode | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class PayloadError(CallSyncError):
    """Raised when a JSON payload does not describe a valid call object."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
        self.error_code = ErrorCode.INVALID_PAYLOAD


class QAReviewError(CallSyncError):
    """Raised when a QA review action is not allowed."""

    def __init__(
        self,
        call_id: str,
        message: str,
        *,
        error_code: ErrorCode | str | None = None,
    ) -> None:
        prefix = f"qa review (call_id={call_id})" if call_id else "qa review"
        super().__init__(f"{prefix}: {message}")
        self.call_id = call_id
        self.message = message
        self.error_code = error_code
