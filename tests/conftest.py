"""Shared fixtures: a gateway app wired to a recording mock backend."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from erp_gateway.api.server import create_app
from erp_gateway.config import GatewayConfig

BACKEND_URL = "http://backend.test"


class RecordingBackend:
    """httpx.MockTransport handler that records every outbound request.

    Queued replies are consumed in order; once the queue is empty the
    default reply (200, empty JSON object) is returned. A queued exception
    class is raised as a transport failure for that request.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[Any] = []
        self.default: httpx.Response = httpx.Response(200, json={})

    def queue(self, *replies: Any) -> None:
        self._replies.extend(replies)

    def fail_with(self, exc_type: type[httpx.TransportError], times: int = 1) -> None:
        self._replies.extend([exc_type] * times)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            return self.default
        reply = self._replies.pop(0)
        if isinstance(reply, type) and issubclass(reply, Exception):
            raise reply("simulated failure", request=request)
        if isinstance(reply, int):
            if reply == 204:
                return httpx.Response(204)
            return httpx.Response(reply, json={"status": reply})
        if callable(reply):
            return reply(request)
        return reply

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def json_body(self, index: int) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def gateway_config(tmp_path) -> GatewayConfig:
    # Trailing slashes are stripped by the config model
    return GatewayConfig(backend_url=f"{BACKEND_URL}//", log_dir=str(tmp_path / "logs"))


@pytest.fixture
def make_client(backend: RecordingBackend) -> Iterator[Callable[..., TestClient]]:
    """Factory for a started TestClient over a custom config."""
    clients: list[TestClient] = []

    def factory(config: GatewayConfig) -> TestClient:
        app = create_app(config, transport=httpx.MockTransport(backend))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, gateway_config: GatewayConfig) -> TestClient:
    return make_client(gateway_config)
