import json
from typing import Any, AsyncIterator, Callable, List, Optional

import httpx
import pytest

from solafon_mcp.config import ConnectorSettings

TEST_API_URL = "https://api.test.solafon.local/api/v1"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep the developer's SOLAFON_* variables out of every test."""
    for name in (
        "SOLAFON_API_URL",
        "SOLAFON_BOT_TOKEN",
        "SOLAFON_LOG_LEVEL",
        "SOLAFON_SEARCH_CONTEXT_BEFORE",
        "SOLAFON_SEARCH_CONTEXT_AFTER",
        "SOLAFON_SEARCH_MAX_WINDOWS",
        "SOLAFON_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def make_settings(**overrides: Any) -> ConnectorSettings:
    values = {"api_url": TEST_API_URL}
    values.update(overrides)
    return ConnectorSettings(_env_file=None, **values)


class RecordingTransport:
    """
    httpx.MockTransport handler that records every outbound request.

    Replies with ``status_code`` and a JSON ``payload`` by default; pass
    ``responder`` to build the response (or raise) per request.
    """

    def __init__(
        self,
        payload: Any = None,
        status_code: int = 200,
        responder: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> None:
        self.payload = {"ok": True, "result": {}} if payload is None else payload
        self.status_code = status_code
        self.responder = responder
        self.requests: List[httpx.Request] = []
        self.clients: List[httpx.AsyncClient] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def client(self) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        self.clients.append(client)
        return client

    async def aclose(self) -> None:
        for client in self.clients:
            await client.aclose()


@pytest.fixture
def settings() -> ConnectorSettings:
    return make_settings()


@pytest.fixture
async def recorder(anyio_backend) -> AsyncIterator[RecordingTransport]:
    transport = RecordingTransport()
    yield transport
    await transport.aclose()


@pytest.fixture
def settings_factory() -> Callable[..., ConnectorSettings]:
    return make_settings


@pytest.fixture
async def transport_factory(anyio_backend) -> AsyncIterator[Callable[..., RecordingTransport]]:
    created: List[RecordingTransport] = []

    def factory(**kwargs: Any) -> RecordingTransport:
        transport = RecordingTransport(**kwargs)
        created.append(transport)
        return transport

    yield factory
    for transport in created:
        await transport.aclose()
