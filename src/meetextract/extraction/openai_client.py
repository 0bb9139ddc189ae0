"""OpenAI API extraction backend (also LM Studio, llama.cpp server, etc.)."""

from __future__ import annotations

import logging

import openai

from meetextract.config import ModelConfig
from meetextract.errors import (
    QUOTA_EXHAUSTED,
    RATE_LIMITED,
    UNAVAILABLE,
    ExtractionError,
    ModelUnavailable,
    ProcessingError,
)
from meetextract.extraction.base import ModelClient
from meetextract.extraction.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def classify_error(exc: openai.OpenAIError) -> ExtractionError:
    """Map an OpenAI SDK exception onto the pipeline's failure kinds."""
    if isinstance(exc, openai.RateLimitError):
        if exc.code == "insufficient_quota":
            return ModelUnavailable(QUOTA_EXHAUSTED, str(exc))
        return ModelUnavailable(RATE_LIMITED, str(exc))
    # APITimeoutError is a subclass of APIConnectionError
    if isinstance(exc, (openai.APIConnectionError, openai.InternalServerError)):
        return ModelUnavailable(UNAVAILABLE, str(exc))
    return ProcessingError(f"AI processing failed: {exc}")


class OpenAIClient(ModelClient):
    """Extracts meeting minutes using an OpenAI-compatible chat API."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        kwargs: dict = {"timeout": config.timeout, "max_retries": config.max_retries}
        if config.host:
            base_url = config.host
            if not base_url.endswith("/v1"):
                base_url = base_url.rstrip("/") + "/v1"
            kwargs["base_url"] = base_url
            # Local servers need no API key, so use a dummy
            kwargs["api_key"] = config.api_key or "not-needed"
        elif config.api_key:
            kwargs["api_key"] = config.api_key
        else:
            raise ProcessingError("OpenAI API is not properly configured. Set OPENAI_API_KEY.")
        self._client = openai.OpenAI(**kwargs)

    def complete(self, instruction: str) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": instruction},
        ]
        # Not every compatible server supports JSON mode
        formats_to_try: list[dict | None] = [{"type": "json_object"}, None]
        for fmt in formats_to_try:
            kwargs = {}
            if fmt is not None:
                kwargs["response_format"] = fmt
            try:
                response = self._client.chat.completions.create(
                    model=self._config.model,
                    messages=messages,
                    temperature=self._config.temperature,
                    max_tokens=self._config.max_tokens,
                    **kwargs,
                )
            except openai.BadRequestError as exc:
                if fmt is not None:
                    logger.debug("Server rejected response_format=%s, retrying without it", fmt)
                    continue
                logger.error("OpenAI API error: %s", exc)
                raise classify_error(exc) from exc
            except openai.OpenAIError as exc:
                logger.error("OpenAI API error: %s", exc)
                raise classify_error(exc) from exc
            return response.choices[0].message.content or ""

        raise ProcessingError("AI processing failed: no completion returned")

    def is_available(self) -> bool:
        try:
            self._client.models.list()
            return True
        except Exception:
            return False
