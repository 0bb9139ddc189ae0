"""Shared fixtures for meetextract tests."""

from __future__ import annotations

import json

import pytest

from meetextract.extraction.base import ModelClient

SCENARIO_NOTES = (
    "Team meeting on June 1st. Decided to launch product on June 15th. "
    "John will prepare documentation by June 10th."
)


class StubClient(ModelClient):
    """Deterministic model stand-in that records the instructions it receives."""

    def __init__(self, reply: str = "{}", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.instructions: list[str] = []

    def complete(self, instruction: str) -> str:
        self.instructions.append(instruction)
        if self.error is not None:
            raise self.error
        return self.reply

    def is_available(self) -> bool:
        return True


@pytest.fixture
def meeting_notes() -> str:
    return SCENARIO_NOTES


@pytest.fixture
def scenario_reply() -> str:
    """What a well-behaved model returns for the June launch notes."""
    return json.dumps({
        "summary": "The team met on June 1st and agreed on a product launch date.",
        "decisions": ["Launch the product on June 15th"],
        "actionItems": [
            {"task": "Prepare documentation", "owner": "John", "deadline": "June 10th"},
        ],
    })


@pytest.fixture
def make_client():
    """Factory for StubClient instances."""
    return StubClient
