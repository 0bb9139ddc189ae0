"""Tolerant parsing of model output into an ExtractionResult."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from meetextract.errors import FormatError
from meetextract.extraction.prompts import clean_response
from meetextract.models import ActionItem, ExtractionResult

logger = logging.getLogger(__name__)


def _optional_text(value: object) -> str | None:
    if not value or isinstance(value, (dict, list)):
        return None
    return str(value)


def normalize_action_item(item: Mapping | ActionItem) -> ActionItem:
    """Default missing action-item fields and fold ``deadline`` into ``due``.

    ``due`` wins over ``deadline`` when both are present.
    """
    if isinstance(item, ActionItem):
        return ActionItem(task=item.task or "", owner=item.owner or None, due=item.due or None)

    due = _optional_text(item.get("due"))
    if due is None:
        due = _optional_text(item.get("deadline"))
    return ActionItem(
        task=_optional_text(item.get("task")) or "",
        owner=_optional_text(item.get("owner")),
        due=due,
    )


def normalize_action_items(items: object) -> list[ActionItem]:
    """Normalize a list of action items; anything but a list yields []."""
    if not isinstance(items, list):
        return []
    out = []
    for item in items:
        if isinstance(item, (Mapping, ActionItem)):
            out.append(normalize_action_item(item))
        elif isinstance(item, str) and item.strip():
            out.append(ActionItem(task=item.strip()))
    return out


def normalize_decisions(decisions: object) -> list[str]:
    if not isinstance(decisions, list):
        return []
    return [str(d) for d in decisions if d is not None and not isinstance(d, (dict, list))]


def normalize_summary(summary: object) -> str:
    return summary.strip() if isinstance(summary, str) else ""


def parse_response(raw: str) -> ExtractionResult:
    """Interpret raw model output as an ExtractionResult.

    Raises:
        FormatError: the output is not a JSON object. The raw text is logged
            at debug level only and never carried in the error.
    """
    text = clean_response(raw or "")
    # JSONDecodeError is a ValueError; deeply nested input raises RecursionError
    try:
        data = json.loads(text)
    except (ValueError, TypeError, RecursionError) as exc:
        logger.warning("Model returned unparseable output (%d chars)", len(text))
        logger.debug("Unparseable model output: %r", raw)
        raise FormatError() from exc

    if not isinstance(data, dict):
        logger.warning("Model returned JSON %s instead of an object", type(data).__name__)
        logger.debug("Unexpected model output: %r", raw)
        raise FormatError()

    return ExtractionResult(
        summary=normalize_summary(data.get("summary")),
        decisions=normalize_decisions(data.get("decisions")),
        action_items=normalize_action_items(data.get("actionItems")),
    )
