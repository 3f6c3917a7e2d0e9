"""Shared fixtures for the ``mediastacks`` test modules."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

import mediastacks.cache as cache_module
from tests.mediastacks.support.http import ClientFactory, RecordingTransport
from tests.mediastacks.support.redis import InMemoryRedis


@pytest_asyncio.fixture
async def http_client_for() -> AsyncIterator[ClientFactory]:
    """Build ``AsyncClient`` instances over scripted transports.

    Every client handed out is closed when the test finishes.
    """

    clients: list[httpx.AsyncClient] = []

    def _make(transport: RecordingTransport) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=transport)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> InMemoryRedis:
    """Route ``Redis.from_url`` to a double and reset the shared client."""

    double = InMemoryRedis()

    def _from_url(url: str, **_: object) -> InMemoryRedis:
        double.urls.append(url)
        return double

    monkeypatch.setattr(cache_module.Redis, "from_url", staticmethod(_from_url))
    monkeypatch.setattr(cache_module, "_redis_client", None)
    return double
