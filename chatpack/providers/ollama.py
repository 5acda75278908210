"""Ollama provider client with native / OpenAI-compatible wire-format detection."""

from __future__ import annotations

import json
from typing import Any, Literal

from chatpack.client.base import ChatClient
from chatpack.client.exceptions import EmptyReplyError, ResponseDecodeError
from chatpack.client.hooks import build_chat_messages
from chatpack.client.options import ClientOption, with_base_url, with_model, with_provider

PROVIDER_OLLAMA = "ollama"
DEFAULT_OLLAMA_BASE_URL = "https://api.ollama.com/v1"
DEFAULT_OLLAMA_MODEL = "glm-4.7:cloud"

WireFormat = Literal["native", "compatible"]

_NATIVE_HOSTS = ("https://ollama.com", "http://ollama.com")
_NATIVE_SUFFIX = "ollama.com"


def resolve_wire_format(base_url: str) -> WireFormat:
    """Classify a base URL as Ollama-native (`/api/chat`) or OpenAI-compatible.

    Pure string match on the URL as configured: no case folding, no host
    parsing. Anything that is not recognizably native is compatible,
    including the empty string.
    """
    if base_url in _NATIVE_HOSTS:
        return "native"
    if _strip_one_trailing_slash(base_url).endswith(_NATIVE_SUFFIX):
        return "native"
    return "compatible"


def _strip_one_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


class OllamaClient(ChatClient):
    """Ollama cloud client.

    Every extension point re-derives the wire format from the current
    `base_url`, so `set_api_key` with a new URL takes effect on the next call.
    """

    display_name = "Ollama"

    def set_auth_header(self, headers: dict[str, str]) -> None:
        # Bearer auth for both wire formats.
        headers["Authorization"] = f"Bearer {self.api_key}"

    def build_url(self) -> str:
        if resolve_wire_format(self.base_url) == "native":
            return _strip_one_trailing_slash(self.base_url) + "/api/chat"
        return self.base_url + "/chat/completions"

    def build_request_body(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        if resolve_wire_format(self.base_url) == "native":
            return {
                "model": self.model,
                "messages": build_chat_messages(system_prompt, user_prompt),
                "stream": False,
            }
        return super().build_request_body(system_prompt, user_prompt)

    def parse_response(self, body: bytes) -> str:
        if resolve_wire_format(self.base_url) == "native":
            return _parse_native_response(body)
        return super().parse_response(body)


def _parse_native_response(body: bytes) -> str:
    # {"message": {"content": "..."}, "done": true}; absent fields read as empty.
    try:
        data = json.loads(body)
    except ValueError as error:
        raise ResponseDecodeError(f"failed to parse Ollama response: {error}") from error
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ResponseDecodeError("failed to parse Ollama response: expected a JSON object")

    message = data.get("message")
    if message is None:
        message = {}
    if not isinstance(message, dict):
        raise ResponseDecodeError("failed to parse Ollama response: 'message' is not an object")

    content = message.get("content")
    if content is None:
        content = ""
    if not isinstance(content, str):
        raise ResponseDecodeError("failed to parse Ollama response: 'message.content' is not a string")

    done = data.get("done")
    if done is not None and not isinstance(done, bool):
        raise ResponseDecodeError("failed to parse Ollama response: 'done' is not a boolean")

    if not content:
        raise EmptyReplyError("Ollama returned empty response")
    return content


def new_ollama_client(*options: ClientOption) -> OllamaClient:
    """Build an Ollama client; caller options override the Ollama presets."""
    presets: tuple[ClientOption, ...] = (
        with_provider(PROVIDER_OLLAMA),
        with_model(DEFAULT_OLLAMA_MODEL),
        with_base_url(DEFAULT_OLLAMA_BASE_URL),
    )
    return OllamaClient(*presets, *options)
