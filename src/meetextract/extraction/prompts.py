"""Prompt construction for meeting-minutes extraction."""

from __future__ import annotations

import re

from meetextract.models import ExtractionRequest

_THINK_RE = re.compile(r"<think>[\s\S]*?</think>\s*", re.IGNORECASE)
_ORPHAN_THINK_CLOSE_RE = re.compile(r"^[\s\S]*?</think>\s*", re.IGNORECASE)
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n([\s\S]*?)\n?```$")


def clean_response(text: str) -> str:
    """Strip reasoning/thinking tags and a wrapping code fence from LLM responses."""
    text = _THINK_RE.sub("", text).strip()
    if "</think>" in text.lower():
        text = _ORPHAN_THINK_CLOSE_RE.sub("", text).strip()
    m = _FENCE_RE.match(text)
    if m:
        text = m.group(1).strip()
    return text


SYSTEM_PROMPT = (
    "You are a professional meeting minutes assistant. "
    "Extract information accurately and format it as valid JSON."
)

INSTRUCTION_HEADER = (
    "Please analyze the following meeting notes and extract the requested information. "
    "Return the response as valid JSON with the following structure:"
)

SUMMARY_FIELD = '  "summary": "A {sentences} sentence summary of the meeting"'

DECISIONS_FIELD = '  "decisions": ["list of key decisions made"]'

ACTION_ITEMS_FIELD = """\
  "actionItems": [
    {
      "task": "description of the task",
      "owner": "person responsible (if mentioned, otherwise null)",
      "due": "deadline (if mentioned, otherwise null)"
    }
  ]"""

NOTES_PROMPT = """Meeting Notes:
{text}"""

GUIDELINE_SOURCE_ONLY = "Extract information only from the provided text"
GUIDELINE_EMPTY = "If no information is available for a section, use an empty array []"
GUIDELINE_NULLS = "For action items without a clear owner or deadline, use null"
GUIDELINE_CONCISE = "Keep the summary concise and relevant"
GUIDELINE_CONCRETE = "Focus on concrete, actionable content"


def _shape_fields(request: ExtractionRequest) -> list[str]:
    options = request.options
    fields = []
    if options.include_summary:
        fields.append(SUMMARY_FIELD.format(sentences=options.max_summary_length))
    if options.include_decisions:
        fields.append(DECISIONS_FIELD)
    if options.include_action_items:
        fields.append(ACTION_ITEMS_FIELD)
    return fields


def _guidelines(request: ExtractionRequest) -> list[str]:
    # Lines naming a section only appear when that section was requested.
    options = request.options
    lines = [GUIDELINE_SOURCE_ONLY, GUIDELINE_EMPTY]
    if options.include_action_items:
        lines.append(GUIDELINE_NULLS)
    if options.include_summary:
        lines.append(GUIDELINE_CONCISE)
    lines.append(GUIDELINE_CONCRETE)
    return lines


def build_prompt(request: ExtractionRequest) -> str:
    """Render a validated request into the instruction sent to the model.

    The JSON shape lists ``summary``, ``decisions`` and ``actionItems`` in that
    order, each only when requested. Output is a pure function of the request.
    """
    fields = _shape_fields(request)
    shape = "{\n" + ",\n".join(fields) + "\n}" if fields else "{}"
    guidance = "\n".join(f"- {line}" for line in _guidelines(request))

    return (
        f"{INSTRUCTION_HEADER}\n\n"
        f"{shape}\n\n"
        f"{NOTES_PROMPT.format(text=request.text)}\n\n"
        f"Important guidelines:\n{guidance}"
    )
