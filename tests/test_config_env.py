import pytest

from chatpack.client import ClientConfigError
from chatpack.config import options_from_env, provider_api_key_env
from chatpack.providers import new_client


def test_provider_api_key_env_defaults() -> None:
    assert provider_api_key_env("ollama") == "OLLAMA_API_KEY"
    assert provider_api_key_env(" OpenAI ") == "OPENAI_API_KEY"
    assert provider_api_key_env("my-provider") == "MY_PROVIDER_API_KEY"


def test_options_from_env_builds_directives() -> None:
    environ = {
        "CHATPACK_BASE_URL": "https://ollama.com",
        "CHATPACK_MODEL": "qwen3",
        "CHATPACK_TIMEOUT_SECONDS": "7.5",
        "CHATPACK_MAX_RETRIES": "5",
        "OLLAMA_API_KEY": "sk-env-key",
    }

    client = new_client("ollama", *options_from_env("ollama", environ))

    assert client.base_url == "https://ollama.com"
    assert client.model == "qwen3"
    assert client.timeout_seconds == 7.5
    assert client.max_retries == 5
    assert client.api_key == "sk-env-key"


def test_options_from_env_empty_environment_keeps_presets() -> None:
    client = new_client("ollama", *options_from_env("ollama", {}))

    assert client.base_url == "https://api.ollama.com/v1"
    assert client.api_key == ""


def test_options_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-process")
    monkeypatch.delenv("CHATPACK_BASE_URL", raising=False)

    client = new_client("openai", *options_from_env("openai"))

    assert client.api_key == "sk-from-process"


@pytest.mark.parametrize(
    "environ",
    [
        {"CHATPACK_TIMEOUT_SECONDS": "soon"},
        {"CHATPACK_MAX_RETRIES": "2.5"},
        {"CHATPACK_MAX_RETRIES": "0"},
    ],
)
def test_options_from_env_rejects_bad_numbers(environ: dict[str, str]) -> None:
    with pytest.raises(ClientConfigError):
        options_from_env("ollama", environ)
