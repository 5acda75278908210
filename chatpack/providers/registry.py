"""Provider client registry and plugin hooks."""

from __future__ import annotations

import importlib
from typing import Callable

from chatpack.client.base import ChatClient
from chatpack.client.options import ClientOption

ProviderFactory = Callable[..., ChatClient]
_PROVIDER_REGISTRY: dict[str, ProviderFactory] = {}


class ProviderRegistryError(ValueError):
    """Raised when provider client registration or lookup fails."""


def _normalize_key(key: str) -> str:
    return key.strip().lower()


def register_provider_client(
    key: str,
    factory: ProviderFactory,
    *,
    overwrite: bool = False,
) -> None:
    normalized_key = _normalize_key(key)
    if not normalized_key:
        raise ProviderRegistryError("Provider key cannot be empty.")
    if not overwrite and normalized_key in _PROVIDER_REGISTRY:
        raise ProviderRegistryError(f"Provider '{normalized_key}' is already registered.")
    _PROVIDER_REGISTRY[normalized_key] = factory


def register_provider_client_entrypoint(
    key: str,
    entrypoint: str,
    *,
    overwrite: bool = False,
) -> None:
    module_name, separator, attr = entrypoint.partition(":")
    if not separator:
        raise ProviderRegistryError(
            f"Invalid provider client entrypoint '{entrypoint}'. Expected module:attribute."
        )
    module = importlib.import_module(module_name)
    target = getattr(module, attr)
    if not callable(target):
        raise ProviderRegistryError(
            f"Provider client entrypoint '{entrypoint}' is not callable."
        )
    register_provider_client(key, target, overwrite=overwrite)


def get_provider_factory(key: str) -> ProviderFactory:
    normalized_key = _normalize_key(key)
    if normalized_key not in _PROVIDER_REGISTRY:
        raise ProviderRegistryError(f"Provider '{normalized_key}' is not registered.")
    return _PROVIDER_REGISTRY[normalized_key]


def new_client(key: str, *options: ClientOption) -> ChatClient:
    """Build a client for a registered provider; options override its presets."""
    return get_provider_factory(key)(*options)


def list_provider_client_keys() -> tuple[str, ...]:
    return tuple(sorted(_PROVIDER_REGISTRY.keys()))


def reset_provider_client_registry() -> None:
    _PROVIDER_REGISTRY.clear()


def initialize_default_provider_clients(*, overwrite: bool = False) -> None:
    from chatpack.providers.deepseek import new_deepseek_client
    from chatpack.providers.ollama import new_ollama_client
    from chatpack.providers.openai import new_openai_client

    defaults: dict[str, ProviderFactory] = {
        "deepseek": new_deepseek_client,
        "ollama": new_ollama_client,
        "openai": new_openai_client,
    }
    for key, factory in defaults.items():
        if key in _PROVIDER_REGISTRY and not overwrite:
            continue
        register_provider_client(key, factory, overwrite=True)


def load_provider_clients_from_plugins(
    plugins: dict[str, str] | None = None,
    *,
    overwrite: bool = False,
) -> None:
    """Load provider client factories from import entrypoint mapping."""
    if not plugins:
        return
    for key, entrypoint in plugins.items():
        register_provider_client_entrypoint(key, entrypoint, overwrite=overwrite)
