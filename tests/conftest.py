"""Pytest configuration and fixtures for polis-client tests.

Provides an in-memory fake backend, a gateway wired to it through
``httpx.ASGITransport``, and a helper for one-off ``httpx.MockTransport``
clients.
"""

from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

from polis_client.api.client import ApiClient
from polis_client.gateway import ApiGateway
from tests.fake_server import FakeBackend, create_app


# ── Fake backend ─────────────────────────────────────────────

@pytest.fixture
def backend() -> FakeBackend:
    """Seeded backend: 25 students, 3 teachers, 4 courses."""
    return FakeBackend.seeded()


@pytest_asyncio.fixture
async def api(backend: FakeBackend) -> AsyncGenerator[ApiGateway, None]:
    """Gateway talking to the fake backend in-process."""
    transport = httpx.ASGITransport(app=create_app(backend))
    gateway = ApiGateway(ApiClient("http://test", transport=transport))

    yield gateway

    await gateway.close()


# ── Mock transport ───────────────────────────────────────────

@pytest_asyncio.fixture
async def mock_client() -> AsyncGenerator[Callable[[Callable], ApiClient], None]:
    """Factory building an ApiClient whose every request goes to ``handler``."""
    clients: list[ApiClient] = []

    def make(handler: Callable[[httpx.Request], httpx.Response]) -> ApiClient:
        client = ApiClient("http://test", transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.close()


# ── Test Markers ─────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Tests against the fake backend")
    config.addinivalue_line("markers", "slow: Slow tests")
