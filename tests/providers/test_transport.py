"""Unit tests for HttpTransport: status classification and resource handling."""

import httpx
import pytest
from vendor_stub import VendorStub

from llmunify.providers.errors import AuthError, ErrorKind, ProviderError, RateLimitError
from llmunify.providers.transport import HttpTransport

_URL = "https://vendor.example/v1/chat/completions"


def _transport(stub: VendorStub) -> HttpTransport:
    return HttpTransport(timeout=5, transport=httpx.MockTransport(stub))


class TestSuccess:
    def test_post_json_sends_body_headers_and_params(self) -> None:
        stub = VendorStub(json_body={"ok": True})
        with _transport(stub) as transport:
            data = transport.post_json(
                _URL, headers={"X-Test": "1"}, body={"a": 1}, params={"key": "k"}
            )

        assert data == {"ok": True}
        request = stub.last_request
        assert request.method == "POST"
        assert request.headers["X-Test"] == "1"
        assert request.url.params["key"] == "k"
        assert stub.last_json == {"a": 1}

    def test_get_json(self) -> None:
        stub = VendorStub(json_body={"data": []})
        with _transport(stub) as transport:
            assert transport.get_json(_URL, headers={}) == {"data": []}
        assert stub.last_request.method == "GET"


class TestStatusClassification:
    def test_unauthorized_maps_to_auth_error(self) -> None:
        stub = VendorStub(status_code=401, json_body={"error": "bad key"})
        with _transport(stub) as transport, pytest.raises(AuthError) as exc_info:
            transport.post_json(_URL, headers={}, body={})

        err = exc_info.value
        assert err.kind is ErrorKind.AUTHENTICATION
        assert err.status_code == 401
        assert "bad key" in err.body

    def test_429_maps_to_rate_limit_with_retry_after(self) -> None:
        stub = VendorStub(status_code=429, text="slow down", headers={"Retry-After": "7"})
        with _transport(stub) as transport, pytest.raises(RateLimitError) as exc_info:
            transport.post_json(_URL, headers={}, body={})

        assert exc_info.value.retry_after == 7.0
        assert exc_info.value.status_code == 429

    def test_429_with_http_date_retry_after_ignored(self) -> None:
        stub = VendorStub(
            status_code=429,
            text="slow down",
            headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"},
        )
        with _transport(stub) as transport, pytest.raises(RateLimitError) as exc_info:
            transport.post_json(_URL, headers={}, body={})
        assert exc_info.value.retry_after is None

    @pytest.mark.parametrize("status", [400, 403, 404, 422, 500, 503])
    def test_other_errors_map_to_generic(self, status: int) -> None:
        stub = VendorStub(status_code=status, text="nope")
        with _transport(stub) as transport, pytest.raises(ProviderError) as exc_info:
            transport.post_json(_URL, headers={}, body={})

        # Must be the exact base class, not a subclass
        assert type(exc_info.value) is ProviderError
        assert exc_info.value.status_code == status
        assert f"HTTP error {status}" in exc_info.value.message


class TestFailures:
    def test_network_error_wrapped_with_cause(self) -> None:
        cause = httpx.ConnectError("connection refused")
        stub = VendorStub(error=cause)
        with _transport(stub) as transport, pytest.raises(ProviderError) as exc_info:
            transport.post_json(_URL, headers={}, body={})

        assert type(exc_info.value) is ProviderError
        assert exc_info.value.original_error is cause

    def test_timeout_wrapped_as_generic(self) -> None:
        stub = VendorStub(error=httpx.ReadTimeout("too slow"))
        with _transport(stub) as transport, pytest.raises(ProviderError) as exc_info:
            transport.get_json(_URL, headers={})
        assert isinstance(exc_info.value.original_error, httpx.ReadTimeout)

    def test_invalid_json(self) -> None:
        stub = VendorStub(text="<html>gateway</html>")
        with _transport(stub) as transport, pytest.raises(ProviderError, match="not valid JSON"):
            transport.post_json(_URL, headers={}, body={})

    def test_non_object_json(self) -> None:
        stub = VendorStub(json_body=[1, 2, 3])
        with _transport(stub) as transport, pytest.raises(ProviderError, match="JSON object"):
            transport.post_json(_URL, headers={}, body={})


class TestLifecycle:
    def test_close_is_idempotent(self) -> None:
        transport = _transport(VendorStub())
        transport.close()
        transport.close()
        assert transport.closed

    def test_request_after_close_raises(self) -> None:
        transport = _transport(VendorStub())
        transport.close()
        with pytest.raises(ProviderError, match="closed"):
            transport.get_json(_URL, headers={})

    def test_context_manager_closes(self) -> None:
        with _transport(VendorStub()) as transport:
            assert not transport.closed
        assert transport.closed
