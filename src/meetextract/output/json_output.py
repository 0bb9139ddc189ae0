"""JSON output formatter for extraction responses."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from meetextract.errors import ExtractionError


def _timestamp(timestamp: datetime | None) -> str:
    ts = timestamp or datetime.now(timezone.utc)
    return ts.isoformat().replace("+00:00", "Z")


def format_result_json(payload: dict, timestamp: datetime | None = None) -> str:
    """Wrap a formatted extraction in the success envelope and render it."""
    envelope = {"timestamp": _timestamp(timestamp), "processed": True, **payload}
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def format_error_json(
    error: ExtractionError, context: dict | None = None, timestamp: datetime | None = None,
) -> str:
    """Render a failure as the error envelope. Never includes raw model output."""
    envelope = {
        "timestamp": _timestamp(timestamp),
        "processed": False,
        "error": {
            "message": error.message,
            "type": error.kind,
            "context": context or {},
        },
    }
    return json.dumps(envelope, indent=2, ensure_ascii=False)
