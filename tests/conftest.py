"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - store: Empty transcript store
    - client_config: Deterministic client configuration
    - orchestrator_factory: Builds orchestrators over an httpx.MockTransport
    - async_client: HTTPX client for the host application
"""

from collections.abc import AsyncGenerator, AsyncIterator, Callable, Iterable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.client.config import DEFAULT_ERROR_MESSAGE, ClientConfig
from src.client.orchestrator import ChatOrchestrator
from src.streaming.reducer import ReducerStrategy
from src.transcript.store import TranscriptStore

TEST_API_URL = "http://chat.test/chat"


class FrameStream(httpx.AsyncByteStream):
    """Response body delivering fixed frames, optionally failing afterwards."""

    def __init__(self, frames: Iterable[bytes], error: Exception | None = None) -> None:
        self._frames = list(frames)
        self._error = error

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for frame in self._frames:
            yield frame
        if self._error is not None:
            raise self._error


def streaming_response(
    *frames: bytes,
    error: Exception | None = None,
    status_code: int = 200,
) -> httpx.Response:
    """Build a streamed event-stream response from raw frames."""
    return httpx.Response(
        status_code,
        headers={"Content-Type": "text/event-stream"},
        stream=FrameStream(frames, error),
    )


@pytest.fixture
def store() -> TranscriptStore:
    """Return an empty transcript store."""
    return TranscriptStore()


@pytest.fixture
def client_config() -> ClientConfig:
    """Return configuration independent of the environment."""
    return ClientConfig(
        api_url=TEST_API_URL,
        system_prefix="You are an AI assistant.",
        error_message=DEFAULT_ERROR_MESSAGE,
        timeout=None,
        strategy=ReducerStrategy.DELTA,
    )


@pytest.fixture
async def orchestrator_factory(
    client_config: ClientConfig,
) -> AsyncGenerator[Callable[..., ChatOrchestrator]]:
    """Build orchestrators whose requests are answered by ``handler``.

    Yields:
        Factory taking a MockTransport handler plus ChatOrchestrator kwargs.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Callable, **kwargs: object) -> ChatOrchestrator:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        kwargs.setdefault("config", client_config)
        return ChatOrchestrator(client=client, **kwargs)

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the host application.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
