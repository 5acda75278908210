from __future__ import annotations

from pathlib import Path

import pytest

from chatpack.client import with_base_url
from chatpack.providers import (
    DeepSeekClient,
    OllamaClient,
    OpenAIClient,
    ProviderRegistryError,
    initialize_default_provider_clients,
    list_provider_client_keys,
    load_provider_clients_from_plugins,
    new_client,
    register_provider_client,
    reset_provider_client_registry,
)


def test_provider_registry_defaults_include_required_keys() -> None:
    keys = list_provider_client_keys()
    assert "ollama" in keys
    assert "openai" in keys
    assert "deepseek" in keys


def test_new_client_builds_preset_clients_with_overrides() -> None:
    ollama = new_client(" Ollama ", with_base_url("https://ollama.com"))
    assert isinstance(ollama, OllamaClient)
    assert ollama.build_url() == "https://ollama.com/api/chat"

    openai = new_client("openai")
    assert isinstance(openai, OpenAIClient)
    assert openai.build_url() == "https://api.openai.com/v1/chat/completions"

    deepseek = new_client("deepseek")
    assert isinstance(deepseek, DeepSeekClient)
    assert deepseek.model == "deepseek-chat"


def test_provider_registry_rejects_empty_duplicate_and_unknown_keys() -> None:
    with pytest.raises(ProviderRegistryError):
        register_provider_client("  ", OllamaClient)
    with pytest.raises(ProviderRegistryError, match="already registered"):
        register_provider_client("ollama", OllamaClient)
    with pytest.raises(ProviderRegistryError, match="not registered"):
        new_client("missing-provider")


def test_provider_registry_plugin_hook_registers_entrypoint(
    tmp_path: Path,
    monkeypatch,
) -> None:
    plugin_module = tmp_path / "provider_plugin_fixture.py"
    plugin_module.write_text(
        "\n".join(
            [
                "from chatpack.client import ChatClient, with_base_url, with_provider",
                "",
                "class FixtureClient(ChatClient):",
                "    display_name = 'Fixture'",
                "",
                "    def build_url(self):",
                "        return self.base_url + '/v2/generate'",
                "",
                "def new_fixture_client(*options):",
                "    return FixtureClient(",
                "        with_provider('fixture-provider'),",
                "        with_base_url('https://fixture.example'),",
                "        *options,",
                "    )",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    reset_provider_client_registry()
    initialize_default_provider_clients()
    try:
        load_provider_clients_from_plugins(
            {"fixture-provider": "provider_plugin_fixture:new_fixture_client"}
        )
        keys = list_provider_client_keys()
        assert "fixture-provider" in keys
        client = new_client("fixture-provider")
        assert client.provider == "fixture-provider"
        assert client.hooks.build_url() == "https://fixture.example/v2/generate"
    finally:
        reset_provider_client_registry()
        initialize_default_provider_clients()


def test_provider_registry_rejects_entrypoint_without_attribute() -> None:
    with pytest.raises(ProviderRegistryError, match="module:attribute"):
        load_provider_clients_from_plugins({"broken": "chatpack.providers.ollama"})
