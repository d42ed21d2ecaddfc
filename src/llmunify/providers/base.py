"""Shared client contract for every provider adapter.

:class:`BaseClient` implements the parts of the contract that do not depend
on the vendor: model resolution, structured logging, OpenTelemetry spans, the
"re-raise typed, wrap untyped" error policy, the never-raising health check,
and idempotent resource release.  Subclasses supply the wire protocol through
four small hooks (:meth:`build_headers`, :meth:`build_url`,
:meth:`build_payload`, :meth:`parse_response`) plus :meth:`_probe`.
"""

import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
import structlog
from opentelemetry import trace
from opentelemetry.trace import StatusCode

from llmunify.providers.errors import ProviderError
from llmunify.providers.models import (
    ClientConfig,
    GenerationRequest,
    GenerationResponse,
    GenerationResult,
    Tool,
)
from llmunify.providers.registry import PROVIDER_DEFAULTS, Provider
from llmunify.providers.transport import HttpTransport

_log = structlog.get_logger(__name__)
_tracer = trace.get_tracer(__name__)


class BaseClient(ABC):
    """One vendor connection: generate, health-check, identify, release.

    Clients are usually built through :func:`llmunify.providers.create_client`
    and used as context managers so the transport is always released::

        with create_client(Provider.ANTHROPIC, ClientConfig(api_key)) as client:
            response = client.generate(GenerationRequest("Hello"))

    Args:
        config: Connection settings.  Kept by reference, never modified.
        transport: Optional httpx transport override, used by tests.
    """

    provider_type: ClassVar[Provider]
    supports_images: ClassVar[bool] = False

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        defaults = PROVIDER_DEFAULTS[self.provider_type]
        self.config = config
        self.default_model = defaults.model
        self.base_url = (config.base_url or defaults.base_url).rstrip("/")
        self._transport = HttpTransport(timeout=config.timeout, transport=transport)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def provider(self) -> Provider:
        return self.provider_type

    def get_provider(self) -> Provider:
        return self.provider_type

    def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Send *request* to the vendor and return the normalized response.

        Raises:
            AuthError: The vendor rejected the credential.
            RateLimitError: The vendor throttled the call.
            ProviderError: Any other vendor, network, or parsing failure.
        """
        model = self.resolve_model(request)
        request_id = str(uuid.uuid4())
        start_time = time.monotonic()

        with _tracer.start_as_current_span("llm.generate") as span:
            span.set_attribute("gen_ai.system", self.provider_type.id)
            span.set_attribute("gen_ai.request.model", model)

            log = _log.bind(request_id=request_id, provider=self.provider_type.id, model=model)
            log.info(
                "llm_request_start",
                parameters=sorted(request.parameters),
                tools=len(request.tools or ()),
                has_image=request.image is not None,
            )
            if request.image is not None and not self.supports_images:
                log.debug("llm_image_ignored", media_type=request.image.media_type)

            try:
                response = self._generate(request, model)

            except ProviderError as exc:
                span.record_exception(exc)
                span.set_status(StatusCode.ERROR, exc.message)
                log.error(
                    "llm_request_error",
                    error_type=type(exc).__name__,
                    error=exc.message,
                    status_code=exc.status_code,
                )
                raise

            except Exception as exc:
                wrapped = self._wrap_error(exc, "generate")
                span.record_exception(exc)
                span.set_status(StatusCode.ERROR, str(exc))
                log.error("llm_request_error", error_type=type(exc).__name__, error=str(exc))
                raise wrapped from exc

            finally:
                duration_ms = round((time.monotonic() - start_time) * 1000, 2)
                log.info("llm_request_complete", duration_ms=duration_ms)

            span.set_attribute("gen_ai.response.model", response.model)
            usage = response.usage
            if isinstance(usage, dict):
                for key, value in usage.items():
                    if isinstance(value, int):
                        span.set_attribute(f"gen_ai.usage.{key}", value)
            return response

    def generate_result(self, request: GenerationRequest) -> GenerationResult:
        """Like :meth:`generate`, but returns failures as values.

        Typed errors are carried unchanged; :meth:`generate` has already
        wrapped anything untyped, so :attr:`GenerationResult.kind` is always
        set on failure.
        """
        try:
            return GenerationResult(response=self.generate(request))
        except ProviderError as exc:
            return GenerationResult(error=exc)

    def is_healthy(self) -> bool:
        """Probe the vendor cheaply.  Returns ``False`` on any failure, never raises."""
        try:
            self._probe()
        except Exception as exc:
            _log.warning(
                "llm_health_check_failed",
                provider=self.provider_type.id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return False
        return True

    def close(self) -> None:
        """Release the transport.  Calling it more than once is harmless."""
        self._transport.close()

    @property
    def closed(self) -> bool:
        return self._transport.closed

    def __enter__(self) -> "BaseClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Vendor hooks
    # ------------------------------------------------------------------

    def resolve_model(self, request: GenerationRequest) -> str:
        return request.model or self.default_model

    @abstractmethod
    def build_headers(self) -> dict[str, str]:
        """Return the authentication and content headers for a call."""

    @abstractmethod
    def build_url(self, model: str) -> str:
        """Return the generation endpoint for *model*."""

    @abstractmethod
    def build_payload(self, request: GenerationRequest, model: str) -> dict[str, Any]:
        """Translate *request* into the vendor's JSON body."""

    @abstractmethod
    def parse_response(self, data: dict[str, Any], model: str) -> GenerationResponse:
        """Extract a :class:`GenerationResponse` from the vendor's JSON."""

    @abstractmethod
    def _probe(self) -> None:
        """Perform the cheapest call that proves the vendor is reachable."""

    def _query_params(self) -> dict[str, str] | None:
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _generate(self, request: GenerationRequest, model: str) -> GenerationResponse:
        data = self._transport.post_json(
            self.build_url(model),
            headers=self.build_headers(),
            body=self.build_payload(request, model),
            params=self._query_params(),
        )
        return self.parse_response(data, model)

    def _with_extra_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Layer the caller's configured headers over the vendor's own."""
        return {**headers, **self.config.headers}

    def _wrap_error(self, error: Exception, operation: str) -> ProviderError:
        """Wrap an untyped failure, naming the vendor and operation."""
        if isinstance(error, ProviderError):
            return error
        return ProviderError(
            f"{self.provider_type.display_name} {operation} failed: {error}",
            provider=self.provider_type.id,
            original_error=error,
        )

    @staticmethod
    def _function_tools(tools: list[Tool]) -> list[dict[str, Any]]:
        """Tool definitions in the chat-completions ``function`` shape."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters,
                },
            }
            for tool in tools
        ]
