"""
Shared fixtures and test doubles for fluxrpc tests.

- TrackingStream: response body stream that records whether it was closed
- CountingToken: credential double counting set() calls
- ScriptedServer: httpx.MockTransport handler returning a scripted response
  and recording every request it receives
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest

from fluxrpc.clients import RPCClient
from fluxrpc.core.logging import reset_logging
from fluxrpc.core.tracing import reset_tracing
from fluxrpc.routing import FLUX_ROUTES

ENDPOINT = "http://flux.test/api/flux"


class TrackingStream(httpx.SyncByteStream):
    """Response stream that flags whether it was released."""

    def __init__(self, content: bytes, fail_read: bool = False) -> None:
        self._content = content
        self._fail_read = fail_read
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        if self._fail_read:
            raise httpx.ReadError("connection reset by peer")
        yield self._content

    def close(self) -> None:
        self.closed = True


class CountingToken:
    """Credential double: records each request it was applied to."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def set(self, request: httpx.Request) -> None:
        self.requests.append(request)
        request.headers["Authorization"] = "Scope-Probe token=test-token"


class ScriptedServer:
    """Mock transport handler answering every request with one response."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body = b""
        self.fail_read = False
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []
        self.streams: list[TrackingStream] = []

    def respond(self, status_code: int, body: bytes | str = b"", fail_read: bool = False) -> None:
        self.status_code = status_code
        self.body = body.encode() if isinstance(body, str) else body
        self.fail_read = fail_read

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        stream = TrackingStream(self.body, fail_read=self.fail_read)
        self.streams.append(stream)
        return httpx.Response(self.status_code, stream=stream)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_stream(self) -> TrackingStream:
        return self.streams[-1]


@pytest.fixture(autouse=True)
def _reset_ambient() -> Iterator[None]:
    yield
    reset_logging()
    reset_tracing()


@pytest.fixture
def server() -> ScriptedServer:
    """Scripted mock server (200, empty body until told otherwise)."""
    return ScriptedServer()


@pytest.fixture
def token() -> CountingToken:
    return CountingToken()


@pytest.fixture
def make_client(server: ScriptedServer, token: CountingToken) -> Iterator[Callable[..., RPCClient]]:
    """Factory for RPCClient instances wired to the scripted server."""
    transports: list[httpx.Client] = []

    def _make(routes=FLUX_ROUTES, endpoint: str = ENDPOINT) -> RPCClient:
        http_client = httpx.Client(transport=httpx.MockTransport(server))
        transports.append(http_client)
        return RPCClient(http_client, routes, endpoint, token)

    yield _make

    for http_client in transports:
        http_client.close()


@pytest.fixture
def client(make_client: Callable[..., RPCClient]) -> RPCClient:
    """RPCClient against the scripted server with the Flux route table."""
    return make_client()
