"""Provider clients and the provider registry."""

from chatpack.providers.deepseek import DeepSeekClient, new_deepseek_client
from chatpack.providers.ollama import (
    DEFAULT_OLLAMA_BASE_URL,
    DEFAULT_OLLAMA_MODEL,
    OllamaClient,
    WireFormat,
    new_ollama_client,
    resolve_wire_format,
)
from chatpack.providers.openai import OpenAIClient, new_openai_client
from chatpack.providers.registry import (
    ProviderRegistryError,
    get_provider_factory,
    initialize_default_provider_clients,
    list_provider_client_keys,
    load_provider_clients_from_plugins,
    new_client,
    register_provider_client,
    register_provider_client_entrypoint,
    reset_provider_client_registry,
)

initialize_default_provider_clients()

__all__ = [
    "DEFAULT_OLLAMA_BASE_URL",
    "DEFAULT_OLLAMA_MODEL",
    "DeepSeekClient",
    "OllamaClient",
    "OpenAIClient",
    "WireFormat",
    "new_deepseek_client",
    "new_ollama_client",
    "new_openai_client",
    "resolve_wire_format",
    "ProviderRegistryError",
    "get_provider_factory",
    "initialize_default_provider_clients",
    "list_provider_client_keys",
    "load_provider_clients_from_plugins",
    "new_client",
    "register_provider_client",
    "register_provider_client_entrypoint",
    "reset_provider_client_registry",
]
