"""Ollama-based extraction backend."""

from __future__ import annotations

import logging
import time

import httpx
import ollama

from meetextract.config import ModelConfig
from meetextract.errors import RATE_LIMITED, UNAVAILABLE, ExtractionError, ModelUnavailable, ProcessingError
from meetextract.extraction.base import ModelClient
from meetextract.extraction.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def classify_error(exc: Exception) -> ExtractionError:
    """Map an Ollama client exception onto the pipeline's failure kinds."""
    if isinstance(exc, ollama.ResponseError):
        if exc.status_code == 429:
            return ModelUnavailable(RATE_LIMITED, str(exc))
        if exc.status_code >= 500:
            return ModelUnavailable(UNAVAILABLE, str(exc))
        return ProcessingError(f"AI processing failed: {exc}")
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return ModelUnavailable(UNAVAILABLE, str(exc))
    return ProcessingError(f"AI processing failed: {exc}")


class OllamaClient(ModelClient):
    """Extracts meeting minutes using a local Ollama model."""

    def __init__(self, config: ModelConfig, backoff_seconds: float = 0.5) -> None:
        self._config = config
        self._backoff_seconds = backoff_seconds
        self._client = ollama.Client(host=config.host or None, timeout=config.timeout)

    def complete(self, instruction: str) -> str:
        retries = max(self._config.max_retries, 0)
        for attempt in range(retries + 1):
            try:
                response = self._client.chat(
                    model=self._config.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": instruction},
                    ],
                    format="json",
                    options={
                        "temperature": self._config.temperature,
                        "num_predict": self._config.max_tokens,
                    },
                )
                return response["message"]["content"] or ""
            except (ollama.ResponseError, httpx.TransportError, ConnectionError) as exc:
                error = classify_error(exc)
                if not isinstance(error, ModelUnavailable) or attempt >= retries:
                    logger.error("Ollama error: %s", exc)
                    raise error from exc
                sleep_s = self._backoff_seconds * (2 ** attempt)
                logger.warning("Ollama call failed (%s), retrying in %.1fs", exc, sleep_s)
                time.sleep(sleep_s)

        raise ProcessingError("AI processing failed: no completion returned")

    def is_available(self) -> bool:
        try:
            self._client.list()
            return True
        except Exception:
            return False
