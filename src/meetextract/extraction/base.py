"""Abstract base class for model backends."""

from __future__ import annotations

import abc


class ModelClient(abc.ABC):
    """Turns one instruction string into raw model text."""

    @abc.abstractmethod
    def complete(self, instruction: str) -> str:
        """Send the instruction to the model and return its raw reply.

        Timeouts and retries are handled inside the backend. Failures are
        raised as ModelUnavailable or ProcessingError.
        """

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Check if the model backend is reachable."""
