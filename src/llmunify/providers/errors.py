"""Custom exception hierarchy for llmunify provider errors.

Every vendor failure is mapped to one of three typed exceptions so callers can
handle them without inspecting raw HTTP or vendor payload internals:

* :class:`AuthError`: the vendor rejected the credential.
* :class:`RateLimitError`: the vendor throttled the call.
* :class:`ProviderError`: everything else (other HTTP errors, network
  failures, unparseable responses, unexpected faults).

Classification from HTTP status codes happens in exactly one place,
:mod:`llmunify.providers.transport`.  Adapters only re-raise typed errors
unchanged and wrap anything untyped as a plain :class:`ProviderError`.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every provider error so callers can branch on it."""

    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"


class ProviderError(Exception):
    """Base exception for all LLM provider errors.

    Attributes:
        message: Human-readable error description.
        provider: Provider identifier (e.g. ``"openai"``).  ``None`` when the
            error was raised below the adapter, e.g. by the transport.
        status_code: HTTP status returned by the vendor, if any.
        body: Raw response body returned by the vendor, if any.
        original_error: The upstream exception that caused this error, if any.
    """

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.original_error = original_error
        super().__init__(message)


class AuthError(ProviderError):
    """Raised when the vendor rejects the credential (HTTP 401)."""

    kind = ErrorKind.AUTHENTICATION


class RateLimitError(ProviderError):
    """Raised when the provider returns HTTP 429 (rate limit exceeded).

    Attributes:
        retry_after: Seconds the vendor asked callers to wait, when it supplies
            a ``Retry-After`` header.  ``None`` if unavailable.  Informational
            only; nothing in this package retries.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        provider: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            provider=provider,
            status_code=status_code,
            body=body,
            original_error=original_error,
        )
        self.retry_after = retry_after
