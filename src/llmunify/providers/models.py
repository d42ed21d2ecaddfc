"""Vendor-neutral request, response, and configuration types.

These types form the public contract between callers and the provider
adapters.  Requests are immutable value objects with fluent ``with_*``
helpers that return modified copies; responses are plain dataclasses built by
the adapters.  Nothing here validates vendor-specific values: prompts may be
empty, parameter values are forwarded verbatim, and credentials are checked
remotely by the vendor, not locally.
"""

import base64
from dataclasses import dataclass, field, replace
from typing import Any

from llmunify.providers.errors import ErrorKind, ProviderError
from llmunify.providers.registry import Provider

# Values in the parameter bag.  Not validated locally; the vendor decides.
ParameterValue = str | int | float | bool | list[Any]


@dataclass
class ClientConfig:
    """Connection settings handed to exactly one client at construction.

    Args:
        api_key: Vendor credential.  May be ``None`` or empty; validity is
            determined remotely.
        base_url: Override for the vendor's default API root.
        timeout: Per-request timeout in seconds, enforced by the transport.
        headers: Extra headers sent with every vendor call.
        managed_deployment: Marks an OpenAI-compatible managed (Azure-style)
            deployment.  ``base_url`` is then the full deployment endpoint and
            the credential travels in an ``api-key`` header.

    Example::

        config = (
            ClientConfig("sk-...")
            .with_base_url("https://my-resource.openai.azure.com/...")
            .with_managed_deployment()
            .with_timeout(10)
        )
    """

    api_key: str | None = None
    base_url: str | None = None
    timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=dict)
    managed_deployment: bool = False

    def with_api_key(self, api_key: str | None) -> "ClientConfig":
        self.api_key = api_key
        return self

    def with_base_url(self, base_url: str | None) -> "ClientConfig":
        self.base_url = base_url
        return self

    def with_timeout(self, timeout: float) -> "ClientConfig":
        self.timeout = timeout
        return self

    def with_header(self, name: str, value: str) -> "ClientConfig":
        self.headers[name] = value
        return self

    def with_managed_deployment(self, enabled: bool = True) -> "ClientConfig":
        self.managed_deployment = enabled
        return self


@dataclass(frozen=True)
class Tool:
    """A callable capability the model may choose to invoke.

    Attributes:
        name: Function name the model will use in its tool call.
        description: Natural-language description shown to the model.
        parameters: JSON-schema object describing the arguments.
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCall:
    """The model's structured request to invoke one :class:`Tool`."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImageAttachment:
    """A single inline image sent alongside the prompt."""

    media_type: str
    data: bytes

    def as_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def as_data_url(self) -> str:
        """Return the image as a ``data:<media_type>;base64,...`` URL."""
        return f"data:{self.media_type};base64,{self.as_base64()}"


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters for a single, stateless generation call.

    Args:
        prompt: User prompt.  May be empty; vendors reject that remotely.
        model: Model override.  ``None`` lets the adapter use its default.
        parameters: Vendor-specific options (``temperature``, ``max_tokens``,
            ...).  Forwarded verbatim and never validated locally; each
            adapter documents the few keys it intercepts.
        stop_sequences: Strings at which generation should stop.
        tools: Tool definitions the model may call.
        image: Optional inline image (only OpenAI sends it).
    """

    prompt: str
    model: str | None = None
    parameters: dict[str, ParameterValue] = field(default_factory=dict)
    stop_sequences: list[str] | None = None
    tools: list[Tool] | None = None
    image: ImageAttachment | None = None

    def with_parameter(self, key: str, value: ParameterValue) -> "GenerationRequest":
        return replace(self, parameters={**self.parameters, key: value})

    def with_model(self, model: str | None) -> "GenerationRequest":
        return replace(self, model=model)

    def with_stop_sequences(self, stop_sequences: list[str] | None) -> "GenerationRequest":
        return replace(
            self,
            stop_sequences=list(stop_sequences) if stop_sequences is not None else None,
        )

    def with_tools(self, tools: list[Tool] | None) -> "GenerationRequest":
        return replace(self, tools=list(tools) if tools is not None else None)

    def with_image(self, media_type: str, data: bytes) -> "GenerationRequest":
        return replace(self, image=ImageAttachment(media_type=media_type, data=data))


@dataclass
class GenerationResponse:
    """Normalized result of a successful generation call.

    Attributes:
        content: Generated text.  Empty when the model answered only with tool
            calls.
        model: Resolved model name as reported by the vendor (may differ from
            the requested name due to aliasing).
        provider: Vendor that served the call.
        metadata: Open bag of vendor extras.  ``usage`` holds token counts
            under the vendor's own field names; ``finish_reason`` holds the
            vendor's stop reason when reported.
        tool_calls: Tool invocations requested by the model, if any.
        function_call: Legacy single function-call marker.  Not populated by
            the current adapters.
    """

    content: str
    model: str
    provider: Provider
    metadata: dict[str, Any] = field(default_factory=dict)
    tool_calls: list[ToolCall] | None = None
    function_call: str | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        return self.metadata.get("usage")


@dataclass(frozen=True)
class GenerationResult:
    """Either a :class:`GenerationResponse` or the error that replaced it.

    Returned by :meth:`BaseClient.generate_result` for callers that prefer to
    branch on :attr:`kind` instead of catching exceptions.
    """

    response: GenerationResponse | None = None
    error: ProviderError | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("GenerationResult needs exactly one of response or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> GenerationResponse:
        """Return the response, or raise the carried error."""
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response
