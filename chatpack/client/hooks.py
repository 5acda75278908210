"""Extension-point contract between the base client and provider adapters."""

from __future__ import annotations

from typing import Any, Protocol


class ClientHooks(Protocol):
    """Protocol for provider-specific request/response behavior."""

    def set_auth_header(self, headers: dict[str, str]) -> None:
        """Set outbound authentication headers in place."""

    def build_url(self) -> str:
        """Return the full request URL for the current configuration."""

    def build_request_body(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        """Build the provider request body for one chat exchange."""

    def parse_response(self, body: bytes) -> str:
        """Extract reply text from raw response bytes or raise."""


def build_chat_messages(system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
    """Role/content pairs: optional system entry, then exactly one user entry."""
    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})
    return messages
