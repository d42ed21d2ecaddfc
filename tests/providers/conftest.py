"""Shared fixtures for the provider adapter tests.

Every client is built with an :class:`httpx.MockTransport` wrapped around a
:class:`vendor_stub.VendorStub`.  No real API calls are made outside
``tests/integration``.
"""

from collections.abc import Iterator

import httpx
import pytest
from vendor_stub import ClientBuilder, VendorStub

from llmunify.providers import BaseClient, ClientConfig


@pytest.fixture
def make_client() -> Iterator[ClientBuilder]:
    """Build a client of the given type wired to a :class:`VendorStub`.

    Clients created here are closed after the test.
    """
    created: list[BaseClient] = []

    def _build(
        client_type: type[BaseClient],
        stub: VendorStub,
        config: ClientConfig | None = None,
    ) -> BaseClient:
        client = client_type(
            config if config is not None else ClientConfig("test-key"),
            transport=httpx.MockTransport(stub),
        )
        created.append(client)
        return client

    yield _build

    for client in created:
        client.close()
