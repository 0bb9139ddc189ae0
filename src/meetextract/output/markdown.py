"""Markdown output formatter for extraction responses."""

from __future__ import annotations


def _format_action_item(item: dict) -> str:
    line = f"- [ ] {item.get('task') or '(unspecified task)'}"
    details = []
    if item.get("owner"):
        details.append(f"**Owner:** {item['owner']}")
    if item.get("due"):
        details.append(f"**Due:** {item['due']}")
    if details:
        line += f" ({', '.join(details)})"
    return line


def format_minutes(payload: dict) -> str:
    """Format a formatted extraction as markdown meeting minutes."""
    lines = ["# Meeting Minutes\n"]

    if "summary" in payload:
        lines += ["## Summary", payload["summary"].strip(), ""]

    if "decisions" in payload:
        lines.append("## Decisions")
        if payload["decisions"]:
            lines += [f"- {d}" for d in payload["decisions"]]
        else:
            lines.append("_None recorded._")
        lines.append("")

    if "actionItems" in payload:
        lines.append("## Action Items")
        if payload["actionItems"]:
            lines += [_format_action_item(item) for item in payload["actionItems"]]
        else:
            lines.append("_None recorded._")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
