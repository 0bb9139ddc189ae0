"""Data models for extraction requests and results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from meetextract.errors import ValidationError

MIN_SUMMARY_LENGTH = 1
MAX_SUMMARY_LENGTH = 10

# wire name -> attribute name
_OPTION_FIELDS = {
    "includeSummary": "include_summary",
    "includeDecisions": "include_decisions",
    "includeActionItems": "include_action_items",
    "maxSummaryLength": "max_summary_length",
}


@dataclass(frozen=True)
class ExtractionOptions:
    include_summary: bool = True
    include_decisions: bool = True
    include_action_items: bool = True
    max_summary_length: int = 3

    @classmethod
    def from_mapping(cls, data: Mapping | None) -> ExtractionOptions:
        """Build options from a caller-supplied mapping.

        Accepts the camelCase wire names as well as the attribute names.
        Absent keys keep their defaults; unknown keys are rejected.
        Values are type-checked by ``validate()``.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValidationError("options must be an object", field="options")

        kwargs = {}
        attr_names = set(_OPTION_FIELDS.values())
        for key, value in data.items():
            name = _OPTION_FIELDS.get(key, key)
            if name not in attr_names:
                raise ValidationError(f'"{key}" is not an allowed option', field=f"options.{key}")
            kwargs[name] = value
        return cls(**kwargs).validate()

    def validate(self) -> ExtractionOptions:
        for name in ("include_summary", "include_decisions", "include_action_items"):
            if not isinstance(getattr(self, name), bool):
                raise ValidationError(f"{name} must be a boolean", field=f"options.{name}")

        length = self.max_summary_length
        # JSON callers may send 3.0 for 3
        if isinstance(length, float) and length.is_integer():
            length = int(length)
        # bool is an int subclass, but True is not a sentence count
        if isinstance(length, bool) or not isinstance(length, int):
            raise ValidationError("max_summary_length must be an integer", field="options.max_summary_length")
        if not MIN_SUMMARY_LENGTH <= length <= MAX_SUMMARY_LENGTH:
            raise ValidationError(
                f"max_summary_length must be between {MIN_SUMMARY_LENGTH} and {MAX_SUMMARY_LENGTH}",
                field="options.max_summary_length",
            )
        if isinstance(self.max_summary_length, float):
            return replace(self, max_summary_length=length)
        return self

    def to_mapping(self) -> dict:
        return {wire: getattr(self, name) for wire, name in _OPTION_FIELDS.items()}


@dataclass(frozen=True)
class ExtractionRequest:
    text: str
    options: ExtractionOptions = field(default_factory=ExtractionOptions)


@dataclass
class ActionItem:
    task: str = ""
    owner: str | None = None
    due: str | None = None

    def to_dict(self) -> dict:
        return {"task": self.task, "owner": self.owner, "due": self.due}


@dataclass
class ExtractionResult:
    summary: str = ""
    decisions: list[str] = field(default_factory=list)
    action_items: list[ActionItem] = field(default_factory=list)
