"""Stable public API surface for chatpack.

This module is the supported import path for library users.
"""

from __future__ import annotations

from chatpack.client import (
    ChatClient,
    ChatClientError,
    ClientConfigError,
    ClientHooks,
    ClientOption,
    EmptyReplyError,
    HTTPStatusError,
    ResponseDecodeError,
    TransportError,
    UpstreamAPIError,
    with_api_key,
    with_base_url,
    with_logger,
    with_max_retries,
    with_max_tokens,
    with_model,
    with_provider,
    with_request_post,
    with_retry_wait,
    with_temperature,
    with_timeout,
)
from chatpack.config import options_from_env
from chatpack.providers import (
    OllamaClient,
    WireFormat,
    list_provider_client_keys,
    new_client,
    new_ollama_client,
    register_provider_client,
    resolve_wire_format,
)

__version__ = "0.1.0"


def chat(
    prompt: str,
    *,
    provider: str = "ollama",
    system: str = "",
    options: tuple[ClientOption, ...] | list[ClientOption] = (),
    use_env: bool = True,
) -> str:
    """Run one exchange against a registered provider.

    Environment options (when `use_env`) are applied before `options`, so
    explicit options win.
    """
    env_options = options_from_env(provider) if use_env else []
    client = new_client(provider, *env_options, *options)
    return client.call(system, prompt)


__all__ = [
    "__version__",
    "chat",
    "ChatClient",
    "ClientHooks",
    "ClientOption",
    "OllamaClient",
    "WireFormat",
    "ChatClientError",
    "ClientConfigError",
    "EmptyReplyError",
    "HTTPStatusError",
    "ResponseDecodeError",
    "TransportError",
    "UpstreamAPIError",
    "list_provider_client_keys",
    "new_client",
    "new_ollama_client",
    "options_from_env",
    "register_provider_client",
    "resolve_wire_format",
    "with_api_key",
    "with_base_url",
    "with_logger",
    "with_max_retries",
    "with_max_tokens",
    "with_model",
    "with_provider",
    "with_request_post",
    "with_retry_wait",
    "with_temperature",
    "with_timeout",
]
