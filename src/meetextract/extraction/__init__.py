from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meetextract.config import ModelConfig
    from meetextract.extraction.base import ModelClient


def create_client(config: ModelConfig) -> ModelClient:
    """Create the appropriate model client based on config."""
    if config.backend == "ollama":
        from meetextract.extraction.ollama_client import OllamaClient

        return OllamaClient(config)
    else:
        from meetextract.extraction.openai_client import OpenAIClient

        return OpenAIClient(config)
