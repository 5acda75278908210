"""Base chat client, extension-point contract and option directives."""

from chatpack.client.base import ChatClient
from chatpack.client.exceptions import (
    ChatClientError,
    ClientConfigError,
    EmptyReplyError,
    HTTPStatusError,
    ResponseDecodeError,
    TransportError,
    UpstreamAPIError,
)
from chatpack.client.hooks import ClientHooks, build_chat_messages
from chatpack.client.options import (
    ClientConfig,
    ClientOption,
    apply_options,
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

__all__ = [
    "ChatClient",
    "ClientHooks",
    "build_chat_messages",
    "ChatClientError",
    "ClientConfigError",
    "EmptyReplyError",
    "HTTPStatusError",
    "ResponseDecodeError",
    "TransportError",
    "UpstreamAPIError",
    "ClientConfig",
    "ClientOption",
    "apply_options",
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
