import json
from importlib.metadata import PackageNotFoundError, version as package_version
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any

import typer

from chatpack.client import (
    ChatClient,
    ChatClientError,
    ClientConfigError,
    ClientOption,
    with_base_url,
    with_max_retries,
    with_timeout,
)
from chatpack.config import options_from_env, provider_api_key_env
from chatpack.providers import (
    OllamaClient,
    ProviderRegistryError,
    list_provider_client_keys,
    new_client,
    resolve_wire_format,
)

app = typer.Typer(help="chatpack CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _resolve_cli_version() -> str:
    try:
        return package_version("chatpack")
    except PackageNotFoundError:
        from chatkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


def _resolve_provider_api_key(
    *,
    provider: str,
    explicit_api_key: str | None,
    api_key_env: str | None,
) -> tuple[str | None, str]:
    env_name = (
        api_key_env.strip()
        if api_key_env and api_key_env.strip()
        else provider_api_key_env(provider)
    )
    if explicit_api_key and explicit_api_key.strip():
        return explicit_api_key.strip(), env_name
    value = os.getenv(env_name)
    if value and value.strip():
        return value.strip(), env_name
    return None, env_name


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show chatpack version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log configuration decisions and request details to stderr.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=_LOG_FORMAT)


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err)


def _fail(message: str, *, exit_code: int, json_output: bool) -> typer.Exit:
    if json_output:
        _echo_json(
            {
                "status": "error",
                "exit_code": exit_code,
                "message": message,
            }
        )
    else:
        _echo(message, err=True)
    return typer.Exit(code=exit_code)


def _wire_format_for(client: ChatClient) -> str:
    if isinstance(client, OllamaClient):
        return resolve_wire_format(client.base_url)
    return "compatible"


@app.command()
def providers(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable provider listing output.",
    ),
) -> None:
    """List registered provider keys."""
    keys = list(list_provider_client_keys())
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "supported providers",
                "providers": keys,
            }
        )
    else:
        _echo("\n".join(keys), force=True)


@app.command()
def resolve(
    provider: str = typer.Option(
        "ollama",
        "--provider",
        help="Registered provider key.",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Base URL to classify (defaults to the provider preset).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable resolution output.",
    ),
) -> None:
    """Show the wire format and endpoint URL a provider would use, without sending anything."""
    options: list[ClientOption] = []
    if base_url is not None:
        options.append(with_base_url(base_url))
    try:
        client = new_client(provider, *options)
    except ProviderRegistryError as error:
        raise _fail(f"resolve failed: {error}", exit_code=2, json_output=json_output) from error

    wire_format = _wire_format_for(client)
    endpoint = client.hooks.build_url()
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "endpoint resolved",
                "provider": client.provider,
                "base_url": client.base_url,
                "wire_format": wire_format,
                "endpoint": endpoint,
            }
        )
    else:
        _echo(f"wire_format={wire_format}")
        _echo(f"endpoint={endpoint}")


@app.command()
def chat(
    prompt: str = typer.Option(
        ...,
        "--prompt",
        help="User prompt text.",
    ),
    system: str = typer.Option(
        "",
        "--system",
        help="Optional system prompt.",
    ),
    provider: str = typer.Option(
        "ollama",
        "--provider",
        help="Registered provider key.",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        help="Model override (defaults to the provider preset).",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Base URL override (defaults to the provider preset).",
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        help="Optional provider API key override.",
    ),
    api_key_env: str | None = typer.Option(
        None,
        "--api-key-env",
        help="Environment variable name used to resolve provider API key.",
    ),
    timeout_seconds: float | None = typer.Option(
        None,
        "--timeout-seconds",
        help="HTTP timeout for provider calls.",
    ),
    max_retries: int | None = typer.Option(
        None,
        "--max-retries",
        help="Total attempts for transient transport failures.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable chat output.",
    ),
) -> None:
    """Send one system/user prompt pair and print the reply."""
    normalized_provider = provider.strip().lower()
    if normalized_provider not in list_provider_client_keys():
        raise _fail(
            f"chat failed: unsupported provider '{provider}'. "
            f"Expected one of: {', '.join(list_provider_client_keys())}.",
            exit_code=2,
            json_output=json_output,
        )

    resolved_api_key, resolved_env_name = _resolve_provider_api_key(
        provider=normalized_provider,
        explicit_api_key=api_key,
        api_key_env=api_key_env,
    )
    if not resolved_api_key:
        raise _fail(
            f"chat failed: missing API key for provider {normalized_provider}. "
            f"Set {resolved_env_name} or pass --api-key/--api-key-env.",
            exit_code=3,
            json_output=json_output,
        )

    try:
        options = options_from_env(normalized_provider)
        if timeout_seconds is not None:
            options.append(with_timeout(timeout_seconds))
        if max_retries is not None:
            options.append(with_max_retries(max_retries))
        client = new_client(normalized_provider, *options)
        client.set_api_key(resolved_api_key, base_url or "", model or "")
    except ClientConfigError as error:
        raise _fail(f"chat failed: {error}", exit_code=2, json_output=json_output) from error

    try:
        reply = client.call(system, prompt)
    except ChatClientError as error:
        raise _fail(f"chat failed: {error}", exit_code=1, json_output=json_output) from error

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "chat succeeded",
                "provider": normalized_provider,
                "model": client.model,
                "endpoint": client.hooks.build_url(),
                "wire_format": _wire_format_for(client),
                "reply": reply,
            }
        )
    else:
        _echo(reply, force=True)


def main() -> None:
    app()
