"""Input normalization and bounds checks for extraction requests."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from meetextract.errors import ValidationError
from meetextract.models import ExtractionOptions, ExtractionRequest

MIN_TEXT_LENGTH = 10
MAX_TEXT_LENGTH = 50_000

ALLOWED_SUFFIXES = (".txt", ".md")
MAX_FILE_BYTES = 10 * 1024 * 1024


def validate_text(text: object) -> str:
    """Return the trimmed text, or raise ValidationError if it is unusable."""
    if text is None:
        raise ValidationError("Text content is required")
    if not isinstance(text, str):
        raise ValidationError("Invalid text content")

    trimmed = text.strip()
    if not trimmed:
        raise ValidationError("Text content is empty")
    if len(trimmed) < MIN_TEXT_LENGTH:
        raise ValidationError(f"Text content too short (minimum {MIN_TEXT_LENGTH} characters)")
    if len(trimmed) > MAX_TEXT_LENGTH:
        raise ValidationError(f"Text content too long (maximum {MAX_TEXT_LENGTH:,} characters)")
    return trimmed


def validate_options(options: ExtractionOptions | Mapping | None) -> ExtractionOptions:
    if isinstance(options, ExtractionOptions):
        return options.validate()
    return ExtractionOptions.from_mapping(options)


def validate_request(
    text: object, options: ExtractionOptions | Mapping | None = None,
) -> ExtractionRequest:
    """Validate raw text and options into an ExtractionRequest.

    Raises:
        ValidationError: text is missing, not a string, empty after trimming,
            or outside the length bounds; or an option has the wrong type or
            is out of range.
    """
    trimmed = validate_text(text)
    return ExtractionRequest(text=trimmed, options=validate_options(options))


def read_notes_file(path: str | Path) -> str:
    """Read a meeting-notes document (.txt or .md) and return its trimmed text."""
    p = Path(path)
    if p.suffix.lower() not in ALLOWED_SUFFIXES:
        raise ValidationError(
            f"File type {p.suffix or '(none)'} not supported. "
            f"Allowed types: {', '.join(ALLOWED_SUFFIXES)}",
            field="file",
        )

    try:
        size = p.stat().st_size
        if size > MAX_FILE_BYTES:
            raise ValidationError("File size must be less than 10MB", field="file")
        content = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ValidationError(f"Failed to read file: not valid UTF-8 ({exc.reason})", field="file") from exc
    except OSError as exc:
        raise ValidationError(f"Failed to read file: {exc.strerror or exc}", field="file") from exc

    return content.strip()
