"""Pytest configuration and shared fixtures."""

from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio

from gemini_fallback.domain.ports.config import GeminiConfig
from gemini_fallback.infrastructure.llm.gemini import GeminiHTTPTransport

Handler = Callable[[httpx.Request], httpx.Response]


def model_of(request: httpx.Request) -> str:
    """Model id from '.../models/<model>:generateContent'."""
    return request.url.path.rsplit("/", 1)[-1].split(":", 1)[0]


@pytest.fixture
def gemini_config():
    """Gemini config pointing at a fake endpoint with a fake key."""
    return GeminiConfig(
        api_key="test-key",
        base_url="https://gemini.test/v1beta",
        models=["m1", "m2"],
    )


@pytest_asyncio.fixture
async def mock_client():
    """Factory for AsyncClients backed by httpx.MockTransport; all are closed after the test."""
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()


@pytest.fixture
def make_transport(gemini_config, mock_client):
    """Build a GeminiHTTPTransport whose requests go to per-model handlers.

    Returns (transport, calls) where calls records model ids in request order.
    A model without a handler answers 404 with a Gemini error body.
    """

    def factory(handlers: dict[str, Handler]) -> tuple[GeminiHTTPTransport, list[str]]:
        calls: list[str] = []

        def dispatch(request: httpx.Request) -> httpx.Response:
            model = model_of(request)
            calls.append(model)
            handler = handlers.get(model)
            if handler is None:
                return httpx.Response(404, json={"error": {"message": f"models/{model} is not found"}})
            return handler(request)

        return GeminiHTTPTransport(gemini_config, client=mock_client(dispatch)), calls

    return factory
