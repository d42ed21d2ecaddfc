"""LLM provider abstraction layer.

Public surface area for the providers package.  Import from here rather than
from the individual submodules so internal structure can change freely.

Example::

    from llmunify.providers import (
        AuthError,
        ClientConfig,
        GenerationRequest,
        Provider,
        RateLimitError,
        create_client,
    )

    with create_client(Provider.OPENAI, ClientConfig("sk-...")) as client:
        request = GenerationRequest("Hello").with_parameter("temperature", 0.2)
        response = client.generate(request)
        print(response.content, response.usage)
"""

from llmunify.providers.anthropic import AnthropicClient
from llmunify.providers.base import BaseClient
from llmunify.providers.errors import (
    AuthError,
    ErrorKind,
    ProviderError,
    RateLimitError,
)
from llmunify.providers.factory import create_client
from llmunify.providers.gemini import GeminiClient
from llmunify.providers.mistral import MistralClient
from llmunify.providers.models import (
    ClientConfig,
    GenerationRequest,
    GenerationResponse,
    GenerationResult,
    ImageAttachment,
    Tool,
    ToolCall,
)
from llmunify.providers.openai import OpenAIClient
from llmunify.providers.registry import PROVIDER_DEFAULTS, Provider

__all__ = [
    # Models
    "ClientConfig",
    "GenerationRequest",
    "GenerationResponse",
    "GenerationResult",
    "ImageAttachment",
    "Tool",
    "ToolCall",
    # Registry
    "Provider",
    "PROVIDER_DEFAULTS",
    # Clients
    "BaseClient",
    "OpenAIClient",
    "AnthropicClient",
    "GeminiClient",
    "MistralClient",
    "create_client",
    # Errors
    "ErrorKind",
    "ProviderError",
    "AuthError",
    "RateLimitError",
]
