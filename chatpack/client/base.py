"""Base chat client: configuration, transport and request lifecycle."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import requests

from chatpack.client.exceptions import (
    EmptyReplyError,
    HTTPStatusError,
    ResponseDecodeError,
    TransportError,
    UpstreamAPIError,
)
from chatpack.client.hooks import ClientHooks, build_chat_messages
from chatpack.client.options import ClientOption, apply_options
from chatpack.redaction import mask_api_key, redact_headers, redact_text

logger = logging.getLogger(__name__)

_ERROR_BODY_MAX_CHARS = 500
_RETRYABLE_TRANSPORT_ERRORS = (requests.ConnectionError, requests.Timeout)


class ChatClient:
    """OpenAI-compatible chat client that dispatches provider behavior through `hooks`.

    The four extension points (`set_auth_header`, `build_url`,
    `build_request_body`, `parse_response`) are always invoked through
    `self.hooks`, never directly, so a provider can replace any of them
    without the lifecycle in `call` knowing which provider is configured.
    The client itself is the default implementer.
    """

    display_name = "Chat"

    def __init__(self, *options: ClientOption, hooks: ClientHooks | None = None) -> None:
        config = apply_options(options)
        self.provider = config.provider
        self.model = config.model
        self.base_url = config.base_url
        self.api_key = config.api_key
        self.timeout_seconds = config.timeout_seconds
        self.max_retries = config.max_retries
        self.retry_wait_seconds = config.retry_wait_seconds
        self.max_tokens = config.max_tokens
        self.temperature = config.temperature
        self.logger = config.logger or logger
        self._request_post = config.request_post
        self.hooks: ClientHooks = hooks if hooks is not None else self

    def set_api_key(self, api_key: str, custom_url: str = "", custom_model: str = "") -> None:
        """Apply a credential and optional base URL / model overrides."""
        self.api_key = api_key

        masked = mask_api_key(api_key)
        if masked is not None:
            self.logger.info("[chatpack] %s API key: %s", self.display_name, masked)
        if custom_url:
            self.base_url = custom_url
            self.logger.info("[chatpack] %s using custom base URL: %s", self.display_name, custom_url)
        else:
            self.logger.info("[chatpack] %s using default base URL: %s", self.display_name, self.base_url)
        if custom_model:
            self.model = custom_model
            self.logger.info("[chatpack] %s using custom model: %s", self.display_name, custom_model)
        else:
            self.logger.info("[chatpack] %s using default model: %s", self.display_name, self.model)

    # Default extension points (OpenAI chat-completions dialect).

    def set_auth_header(self, headers: dict[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self.api_key}"

    def build_url(self) -> str:
        return self.base_url + "/chat/completions"

    def build_request_body(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": build_chat_messages(system_prompt, user_prompt),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def parse_response(self, body: bytes) -> str:
        try:
            data = json.loads(body)
        except ValueError as error:
            raise ResponseDecodeError(f"failed to parse {self.display_name} response: {error}") from error
        if not isinstance(data, dict):
            raise ResponseDecodeError(
                f"failed to parse {self.display_name} response: expected a JSON object"
            )

        upstream_error = data.get("error")
        if upstream_error:
            if isinstance(upstream_error, dict):
                detail = upstream_error.get("message") or json.dumps(upstream_error, sort_keys=True)
            else:
                detail = str(upstream_error)
            raise UpstreamAPIError(f"{self.display_name} API error: {redact_text(str(detail))}")

        choices = data.get("choices")
        if choices is None or choices == []:
            raise EmptyReplyError(f"{self.display_name} returned no choices")
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise ResponseDecodeError(
                f"failed to parse {self.display_name} response: malformed choices"
            )

        message = choices[0].get("message")
        if message is None:
            message = {}
        if not isinstance(message, dict):
            raise ResponseDecodeError(
                f"failed to parse {self.display_name} response: malformed message"
            )
        content = message.get("content")
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise ResponseDecodeError(
                f"failed to parse {self.display_name} response: content is not a string"
            )
        if not content:
            raise EmptyReplyError(f"{self.display_name} returned empty response")
        return content

    # Request lifecycle.

    def call(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat exchange and return the extracted reply text."""
        hooks = self.hooks
        headers = {"Content-Type": "application/json"}
        hooks.set_auth_header(headers)
        url = hooks.build_url()
        body = hooks.build_request_body(system_prompt, user_prompt)
        raw = self._post_with_retry(url, headers=headers, body=body)
        return hooks.parse_response(raw)

    def _post_with_retry(self, url: str, *, headers: dict[str, str], body: dict[str, Any]) -> bytes:
        last_error: Exception | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                return self._post_once(url, headers=headers, body=body, attempt=attempt)
            except _RETRYABLE_TRANSPORT_ERRORS as error:
                last_error = error
                if attempt >= self.max_retries:
                    break
                wait_seconds = self.retry_wait_seconds * attempt
                self.logger.warning(
                    "[chatpack] %s request failed (attempt %d/%d): %s; retrying in %.1fs",
                    self.display_name,
                    attempt,
                    self.max_retries,
                    redact_text(str(error)),
                    wait_seconds,
                )
                time.sleep(wait_seconds)
            except requests.RequestException as error:
                raise TransportError(
                    f"{self.display_name} request failed: {redact_text(str(error))}"
                ) from error

        raise TransportError(
            f"{self.display_name} request failed after {self.max_retries} attempt(s): "
            f"{redact_text(str(last_error))}"
        ) from last_error

    def _post_once(
        self,
        url: str,
        *,
        headers: dict[str, str],
        body: dict[str, Any],
        attempt: int,
    ) -> bytes:
        post_fn = self._request_post or requests.post
        self.logger.debug(
            "[chatpack] %s POST %s attempt=%d model=%s headers=%s",
            self.display_name,
            url,
            attempt,
            body.get("model"),
            redact_headers(headers),
        )
        started = time.monotonic()
        response = post_fn(url, headers=headers, json=body, timeout=self.timeout_seconds)
        elapsed = time.monotonic() - started

        status_code = getattr(response, "status_code", 200)
        self.logger.debug(
            "[chatpack] %s response status=%s elapsed=%.2fs",
            self.display_name,
            status_code,
            elapsed,
        )
        if status_code >= 400:
            text = redact_text(str(getattr(response, "text", "") or ""))
            raise HTTPStatusError(status_code, text[:_ERROR_BODY_MAX_CHARS])
        return response.content
