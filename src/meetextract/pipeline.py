"""Pipeline orchestration: validate -> prompt -> model -> parse -> format."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import click

from meetextract.config import Config
from meetextract.errors import (
    ExtractionError,
    FormatError,
    ModelUnavailable,
    ProcessingError,
    ValidationError,
)
from meetextract.extraction import create_client
from meetextract.extraction.base import ModelClient
from meetextract.extraction.parser import parse_response
from meetextract.extraction.prompts import build_prompt
from meetextract.models import ExtractionOptions
from meetextract.output.formatter import format_response
from meetextract.progress import Spinner
from meetextract.validation import read_notes_file, validate_request

logger = logging.getLogger(__name__)

EXIT_CODES = {
    ValidationError: 2,
    FormatError: 3,
    ModelUnavailable: 4,
    ProcessingError: 1,
}


@dataclass(frozen=True)
class ExtractionOutcome:
    """Either a formatted output or the single error that ended the request."""

    output: dict | None = None
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract(
    text: object,
    options: ExtractionOptions | Mapping | None,
    client: ModelClient,
    progress_label: str | None = None,
) -> dict:
    """Run the extraction pipeline and return the caller-facing dict.

    Raises:
        ValidationError: before the model is called.
        ModelUnavailable: the backend is rate limited, out of quota or down.
        FormatError: the model reply is not a JSON object.
        ProcessingError: any other backend failure.
    """
    request = validate_request(text, options)
    instruction = build_prompt(request)

    try:
        if progress_label:
            with Spinner(progress_label):
                raw = client.complete(instruction)
        else:
            raw = client.complete(instruction)
    except ExtractionError:
        raise
    except Exception as exc:
        logger.exception("Model call failed")
        raise ProcessingError(f"AI processing failed: {exc}") from exc

    result = parse_response(raw)
    return format_response(result, request.options)


def run_extraction(
    text: object,
    options: ExtractionOptions | Mapping | None,
    client: ModelClient,
) -> ExtractionOutcome:
    """Like ``extract()``, but returns the failure as a value instead of raising."""
    try:
        return ExtractionOutcome(output=extract(text, options, client))
    except ExtractionError as exc:
        logger.warning("Extraction failed: %s: %s", exc.kind, exc.message)
        return ExtractionOutcome(error=exc)


def exit_code_for(error: ExtractionError) -> int:
    for kind, code in EXIT_CODES.items():
        if isinstance(error, kind):
            return code
    return 1


def _render(config: Config, payload: dict) -> str:
    if config.output.format == "markdown":
        from meetextract.output.markdown import format_minutes
        return format_minutes(payload)
    else:
        from meetextract.output.json_output import format_result_json
        return format_result_json(payload)


def _report_error(config: Config, error: ExtractionError, context: dict) -> NoReturn:
    if config.output.format == "json":
        from meetextract.output.json_output import format_error_json
        click.echo(format_error_json(error, context))
    else:
        click.echo(f"Error: {error.message}", err=True)
    raise SystemExit(exit_code_for(error))


def run_extract(
    config: Config,
    text: str | None = None,
    notes_file: str | None = None,
    options: ExtractionOptions | None = None,
    output_file: str | None = None,
) -> None:
    """Extract minutes from inline text or a notes file and print/save them."""
    options = options or config.extraction.to_options()
    context = {"hasFile": notes_file is not None, "textLength": len(text) if isinstance(text, str) else 0}

    try:
        if notes_file is not None:
            text = read_notes_file(notes_file)
        client = create_client(config.model)
        label = f"Extracting with {config.model.model}" if sys.stderr.isatty() else None
        payload = extract(text, options, client, progress_label=label)
    except ExtractionError as exc:
        logger.warning("Extraction failed: %s: %s", exc.kind, exc.message)
        _report_error(config, exc, context)

    rendered = _render(config, payload)
    if output_file:
        path = Path(output_file)
        try:
            path.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: Could not write {path}: {exc.strerror or exc}", err=True)
            raise SystemExit(1) from None
        click.echo(f"Minutes saved to {path}")
    else:
        click.echo(rendered.rstrip("\n"))


def run_check(config: Config) -> None:
    """Report whether the configured model backend is reachable."""
    try:
        client = create_client(config.model)
    except ExtractionError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        raise SystemExit(1) from None

    where = config.model.host or "the default endpoint"
    if client.is_available():
        click.echo(f"{config.model.backend} is reachable at {where} (model: {config.model.model}).")
    else:
        click.echo(
            f"Error: {config.model.backend} is not reachable at {where}. Is the server running?",
            err=True,
        )
        raise SystemExit(1)
