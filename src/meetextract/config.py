"""Configuration management with TOML loading and defaults."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from meetextract.models import ExtractionOptions

CONFIG_DIR = Path("~/.config/meetextract").expanduser()
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG_TOML = """\
[model]
backend = "openai"        # "openai" (OpenAI or compatible server) or "ollama"
model = "gpt-3.5-turbo"   # model name
host = ""                 # empty = provider default; LM Studio: http://localhost:1234, ollama: http://localhost:11434
api_key = ""              # or set OPENAI_API_KEY
timeout = 30.0            # seconds per model call
max_retries = 3           # retries on transient backend failures
temperature = 0.3
max_tokens = 1500

[extraction]
include_summary = true
include_decisions = true
include_action_items = true
max_summary_length = 3    # summary sentences, 1-10

[output]
format = "json"           # "json" or "markdown"
"""


@dataclass
class ModelConfig:
    backend: str = "openai"
    model: str = "gpt-3.5-turbo"
    host: str = ""
    api_key: str = ""
    timeout: float = 30.0
    max_retries: int = 3
    temperature: float = 0.3
    max_tokens: int = 1500


@dataclass
class ExtractionConfig:
    include_summary: bool = True
    include_decisions: bool = True
    include_action_items: bool = True
    max_summary_length: int = 3

    def to_options(self) -> ExtractionOptions:
        return ExtractionOptions(
            include_summary=self.include_summary,
            include_decisions=self.include_decisions,
            include_action_items=self.include_action_items,
            max_summary_length=self.max_summary_length,
        )


@dataclass
class OutputConfig:
    format: str = "json"


@dataclass
class Config:
    model: ModelConfig = field(default_factory=ModelConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls) -> Config:
        """Load config from TOML file, falling back to defaults."""
        config = cls()

        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
            config = _merge_toml(config, data)

        # Env var overrides
        if api_key := os.environ.get("OPENAI_API_KEY"):
            config.model.api_key = api_key
        if model := os.environ.get("MEETEXTRACT_MODEL"):
            config.model.model = model
        if ollama_host := os.environ.get("OLLAMA_HOST"):
            if config.model.backend == "ollama":
                config.model.host = ollama_host

        return config


def _merge_section(target: object, values: dict) -> None:
    for k, v in values.items():
        if hasattr(target, k):
            setattr(target, k, v)


def _merge_toml(config: Config, data: dict) -> Config:
    """Merge TOML data into config dataclass."""
    if "model" in data:
        _merge_section(config.model, data["model"])
    if "extraction" in data:
        _merge_section(config.extraction, data["extraction"])
    if "output" in data:
        _merge_section(config.output, data["output"])
    return config


def ensure_config_file() -> Path:
    """Create default config file if it doesn't exist. Returns the path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not CONFIG_PATH.exists():
        CONFIG_PATH.write_text(DEFAULT_CONFIG_TOML)
    return CONFIG_PATH
