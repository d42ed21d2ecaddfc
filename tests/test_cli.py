"""Tests for the interactive CLI (cli.py)."""

import io
from typing import Any
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from llmunify.cli import HELP, USAGE, main, run_interactive
from llmunify.providers import (
    AuthError,
    GenerationResponse,
    Provider,
    ProviderError,
    ToolCall,
)

_RESPONSE = GenerationResponse(
    content="4",
    model="gpt-3.5-turbo-0125",
    provider=Provider.OPENAI,
    metadata={"usage": {"total_tokens": 10}},
)


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock()
    client.is_healthy.return_value = True
    client.generate.return_value = _RESPONSE
    client.__exit__.return_value = False
    return client


@pytest.fixture
def create_client(mocker: Any, client: MagicMock) -> MagicMock:
    return mocker.patch("llmunify.cli.create_client", return_value=client)


def _run(stream_text: str, client: MagicMock, model: str | None = None) -> None:
    run_interactive(client, model, io.StringIO(stream_text))


# ---------------------------------------------------------------------------
# 1. Argument handling
# ---------------------------------------------------------------------------


class TestArguments:
    def test_missing_arguments_print_usage(self, create_client: MagicMock) -> None:
        result = CliRunner().invoke(main, ["openai"])

        assert result.exit_code == 1
        assert USAGE in result.output
        create_client.assert_not_called()

    def test_unknown_provider_rejected(self, create_client: MagicMock) -> None:
        result = CliRunner().invoke(main, ["foo", "key"])

        assert result.exit_code == 1
        assert "Unknown provider: 'foo'" in result.output
        create_client.assert_not_called()

    @pytest.mark.parametrize(
        "args",
        [
            ["openai", "key", "gpt-4", "extra"],
            ["openai", "key", "--timeout", "abc"],
            ["openai", "key", "--no-such-option"],
        ],
        ids=["extra-argument", "bad-timeout", "unknown-option"],
    )
    def test_bad_arguments_exit_with_status_1(
        self, args: list[str], create_client: MagicMock
    ) -> None:
        result = CliRunner().invoke(main, args)

        assert result.exit_code == 1
        assert USAGE in result.output
        create_client.assert_not_called()

    def test_help_still_exits_cleanly(self, create_client: MagicMock) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        create_client.assert_not_called()

    def test_client_built_from_arguments(
        self, create_client: MagicMock, client: MagicMock
    ) -> None:
        result = CliRunner().invoke(
            main,
            ["Anthropic", "sk-ant", "claude-3-sonnet-20240229", "--timeout", "5"],
            input="quit\n",
        )

        assert result.exit_code == 0
        provider, config = create_client.call_args.args
        assert provider is Provider.ANTHROPIC
        assert config.api_key == "sk-ant"
        assert config.timeout == 5.0
        assert config.managed_deployment is False
        assert "Provider: Anthropic" in result.output
        assert "Model: claude-3-sonnet-20240229" in result.output

    def test_managed_deployment_flag(self, create_client: MagicMock) -> None:
        CliRunner().invoke(
            main,
            [
                "openai",
                "azure-key",
                "--base-url",
                "https://res.openai.azure.com/openai/deployments/d",
                "--managed-deployment",
            ],
            input="quit\n",
        )

        _, config = create_client.call_args.args
        assert config.managed_deployment is True
        assert config.base_url == "https://res.openai.azure.com/openai/deployments/d"

    def test_creation_failure_exits(self, mocker: Any) -> None:
        mocker.patch("llmunify.cli.create_client", side_effect=ValueError("boom"))

        result = CliRunner().invoke(main, ["openai", "key"])

        assert result.exit_code == 1
        assert "Error initializing client: boom" in result.output


# ---------------------------------------------------------------------------
# 2. Session lifecycle
# ---------------------------------------------------------------------------


class TestSession:
    def test_banner_and_default_model(self, create_client: MagicMock) -> None:
        result = CliRunner().invoke(main, ["openai", "key"], input="quit\n")

        assert "=== LLM Test CLI ===" in result.output
        assert "Model: default" in result.output
        assert "Goodbye!" in result.output

    def test_unhealthy_client_warns_but_continues(
        self, create_client: MagicMock, client: MagicMock
    ) -> None:
        client.is_healthy.return_value = False

        result = CliRunner().invoke(main, ["openai", "key"], input="quit\n")

        assert result.exit_code == 0
        assert "Warning: Client health check failed" in result.output

    def test_client_released_on_end_of_input(
        self, create_client: MagicMock, client: MagicMock
    ) -> None:
        result = CliRunner().invoke(main, ["openai", "key"], input="")

        assert result.exit_code == 0
        client.__exit__.assert_called_once()


# ---------------------------------------------------------------------------
# 3. Interactive loop
# ---------------------------------------------------------------------------


class TestInteractiveLoop:
    def test_help(self, client: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        _run("help\nquit\n", client)
        assert HELP in capsys.readouterr().out
        client.generate.assert_not_called()

    def test_health(self, client: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        _run("HEALTH\nexit\n", client)
        assert "Client healthy: True" in capsys.readouterr().out

    def test_empty_lines_ignored(self, client: MagicMock) -> None:
        _run("\n   \nquit\n", client)
        client.generate.assert_not_called()

    def test_message_sent_with_model(
        self, client: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _run("What is 2+2?\nquit\n", client, model="gpt-4")

        request = client.generate.call_args.args[0]
        assert request.prompt == "What is 2+2?"
        assert request.model == "gpt-4"

        out = capsys.readouterr().out
        assert "--- Response ---" in out
        assert "Model: gpt-3.5-turbo-0125" in out
        assert "Provider: OpenAI" in out
        assert "usage: {'total_tokens': 10}" in out

    def test_provider_error_reported_and_loop_continues(
        self, client: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client.generate.side_effect = [
            AuthError("Authentication failed: bad key"),
            _RESPONSE,
        ]

        _run("first\nsecond\nquit\n", client)

        captured = capsys.readouterr()
        assert "LLM Error [authentication]: Authentication failed: bad key" in captured.err
        assert client.generate.call_count == 2
        assert "Goodbye!" in captured.out

    def test_cause_printed_when_present(
        self, client: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client.generate.side_effect = ProviderError(
            "OpenAI generate failed: bad payload", original_error=KeyError("choices")
        )

        _run("hi\nquit\n", client)

        err = capsys.readouterr().err
        assert "LLM Error [generic]" in err
        assert "Cause: 'choices'" in err

    def test_tool_calls_counted(
        self, client: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        client.generate.return_value = GenerationResponse(
            content="",
            model="gpt-4o",
            provider=Provider.OPENAI,
            metadata={},
            tool_calls=[ToolCall("call_1", "get_weather", {"location": "Paris"})],
        )

        _run("weather?\nquit\n", client)

        assert "Tool calls: 1" in capsys.readouterr().out
