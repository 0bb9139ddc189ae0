"""Tests for model backends against a mock HTTP server."""

from __future__ import annotations

import json

import pytest
from werkzeug import Response

from meetextract.config import ModelConfig
from meetextract.errors import (
    QUOTA_EXHAUSTED,
    RATE_LIMITED,
    UNAVAILABLE,
    ModelUnavailable,
    ProcessingError,
)
from meetextract.extraction.prompts import SYSTEM_PROMPT

REPLY = '{"summary": "Short.", "decisions": [], "actionItems": []}'


def _completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": "test-model",
    }


def _openai_error(code: str, message: str) -> dict:
    return {"error": {"message": message, "type": code, "code": code, "param": None}}


def _openai_config(httpserver, **kwargs) -> ModelConfig:
    return ModelConfig(backend="openai", host=httpserver.url_for(""), model="test-model", max_retries=0, **kwargs)


def _ollama_config(httpserver, **kwargs) -> ModelConfig:
    return ModelConfig(backend="ollama", host=httpserver.url_for(""), model="test-model", max_retries=0, **kwargs)


class TestCreateClient:
    def test_openai_by_default(self):
        from meetextract.extraction import create_client
        from meetextract.extraction.openai_client import OpenAIClient

        assert isinstance(create_client(ModelConfig(api_key="sk-test")), OpenAIClient)

    def test_ollama(self):
        from meetextract.extraction import create_client
        from meetextract.extraction.ollama_client import OllamaClient

        config = ModelConfig(backend="ollama", host="http://localhost:11434")
        assert isinstance(create_client(config), OllamaClient)

    def test_openai_without_key_or_host_is_unconfigured(self):
        from meetextract.extraction import create_client

        with pytest.raises(ProcessingError, match="not properly configured"):
            create_client(ModelConfig(api_key="", host=""))


class TestOpenAIClient:
    def test_complete_sends_system_and_instruction(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(_completion(REPLY))

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver, temperature=0.2, max_tokens=321))
        assert client.complete("Extract please") == REPLY

        body = json.loads(httpserver.log[0][0].data)
        assert body["model"] == "test-model"
        assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert body["messages"][1] == {"role": "user", "content": "Extract please"}
        assert body["response_format"] == {"type": "json_object"}
        assert body["temperature"] == 0.2
        assert body["max_tokens"] == 321

    def test_falls_back_when_json_mode_rejected(self, httpserver):
        def handler(request):
            body = json.loads(request.data)
            if "response_format" in body:
                return Response(
                    json.dumps(_openai_error("invalid_request_error", "response_format not supported")),
                    status=400,
                    content_type="application/json",
                )
            return Response(json.dumps(_completion(REPLY)), content_type="application/json")

        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_handler(handler)

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver))
        assert client.complete("Extract please") == REPLY
        assert len(httpserver.log) == 2

    def test_bad_request_without_json_mode_is_processing_error(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _openai_error("context_length_exceeded", "too many tokens"), status=400,
        )

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver))
        with pytest.raises(ProcessingError, match="AI processing failed"):
            client.complete("Extract please")

    def test_rate_limited(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _openai_error("rate_limit_exceeded", "Rate limit reached"), status=429,
        )

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver))
        with pytest.raises(ModelUnavailable) as exc_info:
            client.complete("Extract please")
        assert exc_info.value.reason == RATE_LIMITED

    def test_quota_exhausted(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _openai_error("insufficient_quota", "You exceeded your current quota"), status=429,
        )

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver))
        with pytest.raises(ModelUnavailable) as exc_info:
            client.complete("Extract please")
        assert exc_info.value.reason == QUOTA_EXHAUSTED
        assert exc_info.value.message == "AI service quota exceeded. Please contact administrator."

    def test_server_error_is_unavailable(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _openai_error("server_error", "overloaded"), status=503,
        )

        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(_openai_config(httpserver))
        with pytest.raises(ModelUnavailable) as exc_info:
            client.complete("Extract please")
        assert exc_info.value.reason == UNAVAILABLE

    def test_connection_refused_is_unavailable(self):
        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(ModelConfig(host="http://localhost:1", max_retries=0, timeout=2.0))
        with pytest.raises(ModelUnavailable):
            client.complete("Extract please")

    def test_is_available_success(self, httpserver):
        httpserver.expect_request("/v1/models", method="GET").respond_with_json({"data": [], "object": "list"})

        from meetextract.extraction.openai_client import OpenAIClient

        assert OpenAIClient(_openai_config(httpserver)).is_available() is True

    def test_is_available_failure(self):
        from meetextract.extraction.openai_client import OpenAIClient

        client = OpenAIClient(ModelConfig(host="http://localhost:1", max_retries=0))
        assert client.is_available() is False


class TestOllamaClient:
    def test_complete(self, httpserver):
        response_body = {
            "message": {"role": "assistant", "content": REPLY},
            "done": True,
        }
        httpserver.expect_request("/api/chat", method="POST").respond_with_json(response_body)

        from meetextract.extraction.ollama_client import OllamaClient

        client = OllamaClient(_ollama_config(httpserver, temperature=0.1))
        assert client.complete("Extract please") == REPLY

        body = json.loads(httpserver.log[0][0].data)
        assert body["format"] == "json"
        assert body["messages"][0]["content"] == SYSTEM_PROMPT
        assert body["messages"][1]["content"] == "Extract please"
        assert body["options"]["temperature"] == 0.1

    def test_rate_limited(self, httpserver):
        httpserver.expect_request("/api/chat", method="POST").respond_with_json({"error": "busy"}, status=429)

        from meetextract.extraction.ollama_client import OllamaClient

        client = OllamaClient(_ollama_config(httpserver))
        with pytest.raises(ModelUnavailable) as exc_info:
            client.complete("Extract please")
        assert exc_info.value.reason == RATE_LIMITED

    def test_retries_transient_failures(self, httpserver):
        httpserver.expect_request("/api/chat", method="POST").respond_with_json({"error": "loading"}, status=503)

        from meetextract.extraction.ollama_client import OllamaClient

        config = _ollama_config(httpserver)
        config.max_retries = 2
        client = OllamaClient(config, backoff_seconds=0)
        with pytest.raises(ModelUnavailable) as exc_info:
            client.complete("Extract please")
        assert exc_info.value.reason == UNAVAILABLE
        assert len(httpserver.log) == 3

    def test_client_error_not_retried(self, httpserver):
        httpserver.expect_request("/api/chat", method="POST").respond_with_json(
            {"error": "model 'test-model' not found"}, status=404,
        )

        from meetextract.extraction.ollama_client import OllamaClient

        config = _ollama_config(httpserver)
        config.max_retries = 2
        client = OllamaClient(config, backoff_seconds=0)
        with pytest.raises(ProcessingError, match="not found"):
            client.complete("Extract please")
        assert len(httpserver.log) == 1

    def test_is_available_success(self, httpserver):
        httpserver.expect_request("/api/tags", method="GET").respond_with_json({"models": []})

        from meetextract.extraction.ollama_client import OllamaClient

        assert OllamaClient(_ollama_config(httpserver)).is_available() is True

    def test_is_available_failure(self):
        from meetextract.extraction.ollama_client import OllamaClient

        client = OllamaClient(ModelConfig(backend="ollama", host="http://localhost:1"))
        assert client.is_available() is False
