"""Environment-driven client configuration."""

from __future__ import annotations

import os
from typing import Mapping

from chatpack.client.exceptions import ClientConfigError
from chatpack.client.options import (
    ClientOption,
    with_api_key,
    with_base_url,
    with_max_retries,
    with_model,
    with_timeout,
)

BASE_URL_ENV_VAR = "CHATPACK_BASE_URL"
MODEL_ENV_VAR = "CHATPACK_MODEL"
TIMEOUT_ENV_VAR = "CHATPACK_TIMEOUT_SECONDS"
MAX_RETRIES_ENV_VAR = "CHATPACK_MAX_RETRIES"

PROVIDER_API_KEY_ENV = {
    "deepseek": "DEEPSEEK_API_KEY",
    "ollama": "OLLAMA_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def provider_api_key_env(provider: str) -> str:
    """Default API-key variable for a provider (`<PROVIDER>_API_KEY` when unknown)."""
    normalized = provider.strip().lower()
    if normalized in PROVIDER_API_KEY_ENV:
        return PROVIDER_API_KEY_ENV[normalized]
    return normalized.upper().replace("-", "_") + "_API_KEY"


def options_from_env(
    provider: str,
    environ: Mapping[str, str] | None = None,
) -> list[ClientOption]:
    """Build option directives from environment variables; unset values add nothing."""
    env = os.environ if environ is None else environ
    options: list[ClientOption] = []

    base_url = env.get(BASE_URL_ENV_VAR, "").strip()
    if base_url:
        options.append(with_base_url(base_url))

    model = env.get(MODEL_ENV_VAR, "").strip()
    if model:
        options.append(with_model(model))

    timeout_raw = env.get(TIMEOUT_ENV_VAR, "").strip()
    if timeout_raw:
        options.append(with_timeout(_parse_number(TIMEOUT_ENV_VAR, timeout_raw, float)))

    retries_raw = env.get(MAX_RETRIES_ENV_VAR, "").strip()
    if retries_raw:
        options.append(with_max_retries(_parse_number(MAX_RETRIES_ENV_VAR, retries_raw, int)))

    api_key = env.get(provider_api_key_env(provider), "").strip()
    if api_key:
        options.append(with_api_key(api_key))

    return options


def _parse_number(name: str, raw: str, kind: type) -> float | int:
    try:
        return kind(raw)
    except ValueError as error:
        raise ClientConfigError(f"{name} must be a number, got {raw!r}.") from error
