"""Failure kinds surfaced by the extraction pipeline."""

from __future__ import annotations

RATE_LIMITED = "rate_limited"
QUOTA_EXHAUSTED = "quota_exhausted"
UNAVAILABLE = "unavailable"

_UNAVAILABLE_MESSAGES = {
    RATE_LIMITED: "AI service rate limit exceeded. Please try again later.",
    QUOTA_EXHAUSTED: "AI service quota exceeded. Please contact administrator.",
    UNAVAILABLE: "AI service temporarily unavailable. Please try again in a few moments.",
}


class ExtractionError(Exception):
    """Base class for every failure the pipeline reports."""

    kind = "ProcessingError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ExtractionError):
    """Malformed or out-of-range input text or options."""

    kind = "ValidationError"

    def __init__(self, message: str, field: str = "text") -> None:
        super().__init__(message)
        self.field = field


class FormatError(ExtractionError):
    """Model output could not be interpreted as an extraction object."""

    kind = "FormatError"

    def __init__(self, message: str = "Invalid AI response format") -> None:
        super().__init__(message)


class ModelUnavailable(ExtractionError):
    """The model backend is rate limited, out of quota, or unreachable."""

    kind = "ModelUnavailable"

    def __init__(self, reason: str = UNAVAILABLE, detail: str = "") -> None:
        super().__init__(_UNAVAILABLE_MESSAGES.get(reason, _UNAVAILABLE_MESSAGES[UNAVAILABLE]))
        self.reason = reason
        self.detail = detail


class ProcessingError(ExtractionError):
    """Any other backend failure, with the underlying detail for diagnostics."""

    kind = "ProcessingError"
