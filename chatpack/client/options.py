"""Option directives applied in order at client construction."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable

from chatpack.client.exceptions import ClientConfigError

RequestPost = Callable[..., Any]

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_WAIT_SECONDS = 2.0
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.5


@dataclass(slots=True)
class ClientConfig:
    """Mutable configuration assembled from option directives."""

    provider: str = ""
    model: str = ""
    base_url: str = ""
    api_key: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_wait_seconds: float = DEFAULT_RETRY_WAIT_SECONDS
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    logger: logging.Logger | None = None
    request_post: RequestPost | None = field(default=None, repr=False)


ClientOption = Callable[[ClientConfig], None]


def apply_options(options: tuple[ClientOption, ...] | list[ClientOption]) -> ClientConfig:
    config = ClientConfig()
    for option in options:
        option(config)
    return config


def with_provider(provider: str) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.provider = provider

    return apply


def with_model(model: str) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.model = model

    return apply


def with_base_url(base_url: str) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.base_url = base_url

    return apply


def with_api_key(api_key: str) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.api_key = api_key

    return apply


def with_logger(logger: logging.Logger) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.logger = logger

    return apply


def with_timeout(timeout_seconds: float) -> ClientOption:
    if timeout_seconds <= 0:
        raise ClientConfigError(f"timeout must be positive, got {timeout_seconds!r}.")

    def apply(config: ClientConfig) -> None:
        config.timeout_seconds = float(timeout_seconds)

    return apply


def with_max_retries(max_retries: int) -> ClientOption:
    """Total attempts per call; 1 disables retrying."""
    if max_retries < 1:
        raise ClientConfigError(f"max_retries must be at least 1, got {max_retries!r}.")

    def apply(config: ClientConfig) -> None:
        config.max_retries = int(max_retries)

    return apply


def with_retry_wait(retry_wait_seconds: float) -> ClientOption:
    if retry_wait_seconds < 0:
        raise ClientConfigError(
            f"retry wait cannot be negative, got {retry_wait_seconds!r}."
        )

    def apply(config: ClientConfig) -> None:
        config.retry_wait_seconds = float(retry_wait_seconds)

    return apply


def with_max_tokens(max_tokens: int) -> ClientOption:
    if max_tokens < 1:
        raise ClientConfigError(f"max_tokens must be positive, got {max_tokens!r}.")

    def apply(config: ClientConfig) -> None:
        config.max_tokens = int(max_tokens)

    return apply


def with_temperature(temperature: float) -> ClientOption:
    def apply(config: ClientConfig) -> None:
        config.temperature = float(temperature)

    return apply


def with_request_post(request_post: RequestPost) -> ClientOption:
    """Replace `requests.post` as the transport callable."""

    def apply(config: ClientConfig) -> None:
        config.request_post = request_post

    return apply
