"""Caller-facing shaping of an extraction result."""

from __future__ import annotations

from collections.abc import Mapping

from meetextract.extraction.parser import (
    normalize_action_items,
    normalize_decisions,
    normalize_summary,
)
from meetextract.models import ExtractionOptions, ExtractionResult


def format_response(result: ExtractionResult | Mapping, options: ExtractionOptions | None = None) -> dict:
    """Apply the inclusion options to a result and return a new dict.

    ``summary`` is kept only when requested and non-empty. ``decisions`` and
    ``actionItems`` are kept whenever requested, even if empty. Mappings with
    the wire keys are accepted too; their summary and action items are
    normalized the same way the parser does.
    """
    options = options or ExtractionOptions()

    if isinstance(result, Mapping):
        summary = result.get("summary")
        decisions = result.get("decisions")
        action_items = result.get("actionItems")
    else:
        summary = result.summary
        decisions = result.decisions
        action_items = result.action_items

    response: dict = {}
    summary = normalize_summary(summary)
    if options.include_summary and summary:
        response["summary"] = summary
    if options.include_decisions:
        response["decisions"] = normalize_decisions(decisions)
    if options.include_action_items:
        response["actionItems"] = [item.to_dict() for item in normalize_action_items(action_items)]
    return response
