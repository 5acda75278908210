"""DeepSeek provider client."""

from __future__ import annotations

from chatpack.client.base import ChatClient
from chatpack.client.options import ClientOption, with_base_url, with_model, with_provider

PROVIDER_DEEPSEEK = "deepseek"
DEFAULT_DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"


class DeepSeekClient(ChatClient):
    """DeepSeek speaks the OpenAI chat-completions dialect unchanged."""

    display_name = "DeepSeek"


def new_deepseek_client(*options: ClientOption) -> DeepSeekClient:
    presets: tuple[ClientOption, ...] = (
        with_provider(PROVIDER_DEEPSEEK),
        with_model(DEFAULT_DEEPSEEK_MODEL),
        with_base_url(DEFAULT_DEEPSEEK_BASE_URL),
    )
    return DeepSeekClient(*presets, *options)
