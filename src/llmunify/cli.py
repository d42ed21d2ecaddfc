"""Interactive shell for trying a provider by hand.

Usage::

    llmunify <provider> <api_key> [model]

Each non-empty line typed at the prompt is sent as one request.  ``help``,
``health`` and ``quit``/``exit`` are control words.
"""

import sys
import time
from typing import TextIO

import click
import structlog

from llmunify.config import get_settings
from llmunify.observability import configure_logging, configure_tracing
from llmunify.providers import (
    BaseClient,
    ClientConfig,
    GenerationRequest,
    Provider,
    ProviderError,
    create_client,
)

_log = structlog.get_logger(__name__)

USAGE = """Usage: llmunify <provider> <api_key> [model]

Providers:
- openai       : OpenAI GPT models
- anthropic    : Anthropic Claude models
- gemini       : Google Gemini models
- mistral      : Mistral AI models

Examples:
llmunify openai sk-your-key gpt-4
llmunify anthropic your-key claude-3-sonnet-20240229
llmunify gemini your-key gemini-pro
llmunify mistral your-key mistral-medium"""

HELP = """Available commands:
- <message>    : Send a message to the LLM
- help         : Show this help message
- health       : Check client health status
- quit/exit    : Exit the CLI

Simply type your message and press Enter to send it to the LLM."""


class _UsageCommand(click.Command):
    """Reports argument errors with the usage text and exit status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            click.echo(f"Error: {exc.format_message()}", err=True)
            click.echo(USAGE)
            ctx.exit(1)


@click.command(cls=_UsageCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("provider_name", required=False)
@click.argument("api_key", required=False)
@click.argument("model", required=False)
@click.option("--base-url", default=None, help="Override the vendor's API root.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.option(
    "--managed-deployment",
    is_flag=True,
    help="Treat --base-url as a managed (Azure-style) OpenAI deployment endpoint.",
)
@click.option("--log-level", default=None, help="structlog level (default from LOG_LEVEL).")
def main(
    provider_name: str | None,
    api_key: str | None,
    model: str | None,
    base_url: str | None,
    timeout: float | None,
    managed_deployment: bool,
    log_level: str | None,
) -> None:
    """Chat with one text-generation provider from the terminal."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_format)
    configure_tracing(settings)

    if provider_name is None or api_key is None:
        click.echo(USAGE)
        sys.exit(1)

    try:
        provider = Provider.from_id(provider_name)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(USAGE)
        sys.exit(1)

    config = (
        ClientConfig(api_key)
        .with_base_url(base_url)
        .with_timeout(timeout if timeout is not None else settings.llm_timeout)
        .with_managed_deployment(managed_deployment)
    )

    try:
        client = create_client(provider, config)
    except Exception as exc:
        click.echo(f"Error initializing client: {exc}", err=True)
        sys.exit(1)

    with client:
        click.echo("=== LLM Test CLI ===")
        click.echo(f"Provider: {provider.display_name}")
        click.echo(f"Model: {model or 'default'}")
        click.echo("Type 'quit' to exit, 'help' for commands")
        click.echo()

        if not client.is_healthy():
            click.echo("Warning: Client health check failed", err=True)

        run_interactive(client, model, click.get_text_stream("stdin"))


def run_interactive(client: BaseClient, model: str | None, stream: TextIO) -> None:
    """Read prompts from *stream* until ``quit``/``exit`` or end of input."""
    while True:
        click.echo("> ", nl=False)
        line = stream.readline()
        if not line:
            click.echo()
            break

        text = line.strip()
        command = text.lower()

        if command in ("quit", "exit"):
            click.echo("Goodbye!")
            break
        if command == "help":
            click.echo(HELP)
            continue
        if command == "health":
            click.echo(f"Client healthy: {client.is_healthy()}")
            continue
        if not text:
            continue

        _send(client, GenerationRequest(text, model=model))


def _send(client: BaseClient, request: GenerationRequest) -> None:
    click.echo("Sending request...")
    start_time = time.monotonic()

    try:
        response = client.generate(request)
    except ProviderError as exc:
        click.echo(f"LLM Error [{exc.kind.value}]: {exc.message}", err=True)
        if exc.original_error is not None:
            click.echo(f"Cause: {exc.original_error}", err=True)
        return
    except Exception as exc:
        _log.exception("cli_unexpected_error")
        click.echo(f"Unexpected error: {exc}", err=True)
        return

    duration_ms = round((time.monotonic() - start_time) * 1000)

    click.echo("\n--- Response ---")
    click.echo(response.content)
    click.echo("\n--- Metadata ---")
    click.echo(f"Model: {response.model}")
    click.echo(f"Provider: {response.provider.display_name}")
    click.echo(f"Response time: {duration_ms}ms")

    if response.metadata:
        click.echo("Additional metadata:")
        for key, value in response.metadata.items():
            click.echo(f"  {key}: {value}")

    if response.tool_calls:
        click.echo(f"Tool calls: {len(response.tool_calls)}")

    click.echo()


if __name__ == "__main__":
    main()
