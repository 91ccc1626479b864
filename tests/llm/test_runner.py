"""Tests for the chat-completion runner."""

from __future__ import annotations

import json

import pytest

from briefly.llm.runner import LLMRunner


@pytest.fixture(autouse=True)
def _clear_llm_env(monkeypatch) -> None:
    for key in (*LLMRunner.ENV_MODEL_KEYS, *LLMRunner.ENV_BASE_URL_KEYS, *LLMRunner.ENV_API_KEY_KEYS):
        monkeypatch.delenv(key, raising=False)


def test_llm_runner_constructs_request() -> None:
    captured = {}

    def fake_runner(request):
        captured["prompt"] = request.prompt
        captured["system"] = request.system
        captured["model"] = request.model
        captured["temperature"] = request.temperature
        captured["max_tokens"] = request.max_tokens
        captured["base_url"] = request.base_url
        captured["api_key"] = request.api_key
        captured["request_timeout"] = request.request_timeout
        return "response"

    runner = LLMRunner(
        model="custom-model",
        temperature=0.15,
        max_tokens=256,
        api_key=None,
        request_timeout=42.0,
        runner=fake_runner,
    )
    result = runner.run("Hello world", system="system message")

    assert result == "response"
    assert captured == {
        "prompt": "Hello world",
        "system": "system message",
        "model": "custom-model",
        "temperature": 0.15,
        "max_tokens": 256,
        "base_url": "https://api.openai.com/v1",
        "api_key": None,
        "request_timeout": 42.0,
    }


def test_llm_runner_defaults() -> None:
    runner = LLMRunner()

    assert runner.model == "gpt-4o-mini"
    assert runner.base_url == "https://api.openai.com/v1"
    assert runner.temperature == 0.3
    assert runner.max_tokens == 1000
    assert runner.request_timeout == 60.0
    assert runner.api_key is None


def test_llm_runner_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_MODEL", "env-model")
    monkeypatch.setenv("BRIEFLY_LLM_BASE_URL", "http://localhost:8080/v1/")
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")

    runner = LLMRunner()

    assert runner.model == "env-model"
    assert runner.base_url == "http://localhost:8080/v1"
    assert runner.api_key == "env-key"


def test_llm_runner_http_posts_payload(monkeypatch) -> None:
    captured = {}

    class FakeResponse:
        def __init__(self, payload):
            self._payload = payload

        def read(self):
            return json.dumps(self._payload).encode("utf-8")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    def fake_urlopen(request, timeout=None):
        captured["url"] = request.full_url
        captured["headers"] = {k.lower(): v for k, v in request.header_items()}
        captured["payload"] = json.loads(request.data.decode("utf-8"))
        captured["timeout"] = timeout
        return FakeResponse({"choices": [{"message": {"content": " A CLI tool. "}}]})

    monkeypatch.setattr("briefly.llm.runner.urlopen", fake_urlopen)

    runner = LLMRunner(
        model="gpt-4o-mini",
        base_url="https://llm.example.test/v1/",
        api_key="secret",
        temperature=0.3,
        max_tokens=1000,
        request_timeout=25.0,
    )
    result = runner.run("Describe the project.", system="Be concise.")

    assert result == "A CLI tool."
    assert captured["url"] == "https://llm.example.test/v1/chat/completions"
    headers = captured["headers"]
    assert headers["content-type"] == "application/json"
    assert headers["authorization"] == "Bearer secret"
    payload = captured["payload"]
    assert payload["model"] == "gpt-4o-mini"
    assert payload["messages"] == [
        {"role": "system", "content": "Be concise."},
        {"role": "user", "content": "Describe the project."},
    ]
    assert payload["temperature"] == 0.3
    assert payload["max_tokens"] == 1000
    assert captured["timeout"] == 25.0


def test_llm_runner_requires_api_key(monkeypatch) -> None:
    def fail_urlopen(*args, **kwargs):  # pragma: no cover - must not be reached
        raise AssertionError("network must not be used without an API key")

    monkeypatch.setattr("briefly.llm.runner.urlopen", fail_urlopen)

    with pytest.raises(RuntimeError, match="API key"):
        LLMRunner(api_key=None).run("hi")


def test_llm_runner_rejects_empty_completion(monkeypatch) -> None:
    class EmptyResponse:
        def read(self):
            return b'{"choices": []}'

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("briefly.llm.runner.urlopen", lambda request, timeout=None: EmptyResponse())

    with pytest.raises(RuntimeError, match="empty response"):
        LLMRunner(api_key="secret").run("hi")
