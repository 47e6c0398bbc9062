"""Client fixtures — API client bound to the real app, plus scripted transports.

Design Decisions:
    - api_client drives the real FastAPI app through ASGITransport, so form
      and list tests exercise the full request path
    - scripted_client uses httpx.MockTransport for responses the app never
      produces (non-JSON bodies, network failures, delayed responses)
"""

import pytest
from httpx import ASGITransport, MockTransport

from userhub.client.api import UsersApiClient


@pytest.fixture
async def api_client(app, sink):
    client = UsersApiClient(
        "http://test", transport=ASGITransport(app=app), sink=sink,
    )
    yield client
    await client.aclose()


@pytest.fixture
async def scripted_client(sink):
    """Factory: UsersApiClient answering every request with handler(request)."""
    clients = []

    def _make(handler):
        client = UsersApiClient(
            "http://test", transport=MockTransport(handler), sink=sink,
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()
