from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

import pytest
import requests
from typer.testing import CliRunner

from chatpack.cli.app import app


@dataclass(slots=True)
class _FakeResponse:
    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


@dataclass(slots=True)
class _RecordingPost:
    response: _FakeResponse
    calls: list[dict[str, Any]] = field(default_factory=list)

    def __call__(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        return self.response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "OLLAMA_API_KEY",
        "OPENAI_API_KEY",
        "CHATPACK_BASE_URL",
        "CHATPACK_MODEL",
        "CHATPACK_TIMEOUT_SECONDS",
        "CHATPACK_MAX_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)


def test_cli_providers_lists_default_keys() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["providers", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "ok"
    assert {"ollama", "openai", "deepseek"} <= set(payload["providers"])


def test_cli_resolve_reports_native_and_compatible_endpoints() -> None:
    runner = CliRunner()

    native = runner.invoke(app, ["resolve", "--base-url", "https://ollama.com/", "--json"])
    assert native.exit_code == 0, native.output
    native_payload = json.loads(native.stdout.strip())
    assert native_payload["wire_format"] == "native"
    assert native_payload["endpoint"] == "https://ollama.com/api/chat"

    compatible = runner.invoke(app, ["resolve", "--base-url", "https://api.example.com"])
    assert compatible.exit_code == 0, compatible.output
    assert "wire_format=compatible" in compatible.output
    assert "endpoint=https://api.example.com/chat/completions" in compatible.output


def test_cli_chat_native_ollama_round_trip(monkeypatch: pytest.MonkeyPatch) -> None:
    post = _RecordingPost(_FakeResponse(200, b'{"message":{"content":"hello"},"done":true}'))
    monkeypatch.setattr(requests, "post", post)
    monkeypatch.setenv("OLLAMA_API_KEY", "sk-ollama-test-key")
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "chat",
            "--provider",
            "ollama",
            "--base-url",
            "https://ollama.com",
            "--model",
            "qwen3",
            "--system",
            "be brief",
            "--prompt",
            "say hello",
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout.strip())
    assert payload["reply"] == "hello"
    assert payload["wire_format"] == "native"
    assert payload["model"] == "qwen3"
    assert payload["endpoint"] == "https://ollama.com/api/chat"

    sent = post.calls[0]
    assert sent["url"] == "https://ollama.com/api/chat"
    assert sent["headers"]["Authorization"] == "Bearer sk-ollama-test-key"
    assert [message["role"] for message in sent["json"]["messages"]] == ["system", "user"]


def test_cli_chat_plain_output_prints_reply(monkeypatch: pytest.MonkeyPatch) -> None:
    body = json.dumps({"choices": [{"message": {"content": "compatible reply"}}]}).encode()
    monkeypatch.setattr(requests, "post", _RecordingPost(_FakeResponse(200, body)))
    runner = CliRunner()

    result = runner.invoke(app, ["chat", "--prompt", "hi", "--api-key", "sk-explicit-key"])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "compatible reply"


def test_cli_chat_missing_api_key_exits_3() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["chat", "--prompt", "hi"])

    assert result.exit_code == 3
    assert "OLLAMA_API_KEY" in result.output


def test_cli_chat_rejects_unknown_provider() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["chat", "--provider", "unknown", "--prompt", "hi"])

    assert result.exit_code == 2
    assert "unsupported provider" in result.output


def test_cli_chat_empty_reply_exits_1(monkeypatch: pytest.MonkeyPatch) -> None:
    post = _RecordingPost(_FakeResponse(200, b'{"message":{"content":""},"done":true}'))
    monkeypatch.setattr(requests, "post", post)
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "chat",
            "--base-url",
            "https://ollama.com",
            "--prompt",
            "hi",
            "--api-key",
            "sk-explicit-key",
            "--json",
        ],
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert "empty response" in payload["message"]


def test_cli_chat_rejects_invalid_retry_count() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["chat", "--prompt", "hi", "--api-key", "sk-explicit-key", "--max-retries", "0"],
    )

    assert result.exit_code == 2
    assert "max_retries" in result.output


def test_cli_chat_malformed_base_url_reports_transport_failure() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "chat",
            "--base-url",
            "not-a-url",
            "--prompt",
            "hi",
            "--api-key",
            "sk-explicit-key",
            "--max-retries",
            "1",
            "--json",
        ],
    )

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert "request failed" in payload["message"]
