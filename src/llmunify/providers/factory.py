"""Build the adapter that matches a :class:`Provider`."""

import structlog

from llmunify.providers.anthropic import AnthropicClient
from llmunify.providers.base import BaseClient
from llmunify.providers.gemini import GeminiClient
from llmunify.providers.mistral import MistralClient
from llmunify.providers.models import ClientConfig
from llmunify.providers.openai import OpenAIClient
from llmunify.providers.registry import Provider

_log = structlog.get_logger(__name__)

_CLIENT_TYPES: dict[Provider, type[BaseClient]] = {
    Provider.OPENAI: OpenAIClient,
    Provider.ANTHROPIC: AnthropicClient,
    Provider.GEMINI: GeminiClient,
    Provider.MISTRAL: MistralClient,
}


def create_client(provider: Provider | str | None, config: ClientConfig) -> BaseClient:
    """Return a fresh client for *provider*, configured with *config*.

    Args:
        provider: A :class:`Provider` or its identifier (``"openai"``, ...).
        config: Passed to the client unmodified.

    Raises:
        ValueError: If *provider* is ``None`` or names no supported vendor.
    """
    if provider is None:
        raise ValueError("Provider cannot be None")
    if isinstance(provider, str):
        provider = Provider.from_id(provider)

    client_type = _CLIENT_TYPES.get(provider)
    if client_type is None:
        raise ValueError(f"Unsupported provider: {provider!r}")

    _log.debug("llm_client_created", provider=provider.id, base_url=config.base_url)
    return client_type(config)
