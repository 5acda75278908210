"""OpenAI provider client."""

from __future__ import annotations

from chatpack.client.base import ChatClient
from chatpack.client.options import ClientOption, with_base_url, with_model, with_provider

PROVIDER_OPENAI = "openai"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAIClient(ChatClient):
    """Chat-completions client using the base client's default hooks."""

    display_name = "OpenAI"


def new_openai_client(*options: ClientOption) -> OpenAIClient:
    presets: tuple[ClientOption, ...] = (
        with_provider(PROVIDER_OPENAI),
        with_model(DEFAULT_OPENAI_MODEL),
        with_base_url(DEFAULT_OPENAI_BASE_URL),
    )
    return OpenAIClient(*presets, *options)
