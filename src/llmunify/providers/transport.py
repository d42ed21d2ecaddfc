"""Blocking JSON-over-HTTP transport shared by every adapter.

This is the single place where HTTP status codes are classified into the
error taxonomy:

==============================  ==============================
Outcome                         Raised exception
==============================  ==============================
HTTP 401                        :class:`AuthError`
HTTP 429                        :class:`RateLimitError`
any other HTTP status >= 400    :class:`ProviderError`
network failure / timeout       :class:`ProviderError`
body is not a JSON object       :class:`ProviderError`
==============================  ==============================

Adapters never look at status codes themselves.
"""

from typing import Any

import httpx
import structlog

from llmunify.providers.errors import AuthError, ProviderError, RateLimitError

_log = structlog.get_logger(__name__)

_AUTH_STATUS = 401
_RATE_LIMIT_STATUS = 429


class HttpTransport:
    """Owns one :class:`httpx.Client` for the lifetime of a provider client.

    Args:
        timeout: Per-request timeout in seconds.
        transport: Optional low-level httpx transport.  Tests pass an
            :class:`httpx.MockTransport` here to simulate vendors.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._closed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def post_json(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST *body* as JSON and return the decoded JSON object."""
        return self._request("POST", url, headers=headers, json=body, params=params)

    def get_json(
        self,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET *url* and return the decoded JSON object."""
        return self._request("GET", url, headers=headers, params=params)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the underlying connection pool.  Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        if self._closed:
            raise ProviderError("HTTP transport is closed")

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            _log.debug("http_request_failed", method=method, error=str(exc))
            raise ProviderError(
                f"HTTP request failed: {exc}",
                original_error=exc,
            ) from exc

        if response.status_code >= 400:
            raise self._classify(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                body=response.text,
                original_error=exc,
            ) from exc

        if not isinstance(data, dict):
            raise ProviderError(
                f"Expected a JSON object, got {type(data).__name__}",
                status_code=response.status_code,
                body=response.text,
            )
        return data

    @staticmethod
    def _classify(response: httpx.Response) -> ProviderError:
        """Map an error response to the matching taxonomy exception."""
        status = response.status_code
        body = response.text

        if status == _AUTH_STATUS:
            return AuthError(
                f"Authentication failed: {body}",
                status_code=status,
                body=body,
            )

        if status == _RATE_LIMIT_STATUS:
            return RateLimitError(
                f"Rate limit exceeded: {body}",
                retry_after=_parse_retry_after(response.headers.get("retry-after")),
                status_code=status,
                body=body,
            )

        return ProviderError(f"HTTP error {status}: {body}", status_code=status, body=body)


def _parse_retry_after(value: str | None) -> float | None:
    """Parse a delta-seconds ``Retry-After`` header; HTTP-date forms are ignored."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
