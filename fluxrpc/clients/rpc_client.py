"""
fluxrpc - Flux Service RPC Client

Blocking HTTP client for the Flux service API. Every public operation is a
thin wrapper over one of three request primitives:

- get(): GET, response body always decoded (an empty body is a DecodeError)
- post_with_response(): POST, response body decoded only when non-empty
- post() / post_with_body(): POST with the response discarded

All three resolve their URL through the injected route table and classify
the response through execute_request(): exactly 200 passes through, any
other status becomes an APIError carrying the trimmed body text.

Patterns Applied:
- Injected collaborators: httpx.Client transport, route table, token
- Namespaced exceptions chained with ``raise ... from``
- Response stream closed on every exit path

Anti-Patterns Avoided:
- Retries or swallowed errors inside the client (callers decide on retry
  using APIError.status_code)
- New httpx.Client per request
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from opentelemetry import trace
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from fluxrpc.clients.credentials import TokenProtocol
from fluxrpc.core.exceptions import (
    APIError,
    DecodeError,
    EncodeError,
    RequestConstructionError,
    RouteConstructionError,
    TransportError,
    URLConstructionError,
)
from fluxrpc.core.logging import get_logger
from fluxrpc.core.tracing import get_tracer
from fluxrpc.models import (
    HistoryEntry,
    ImageStatus,
    InstanceConfig,
    Job,
    JobID,
    PostReleaseResponse,
    ReleaseJobParams,
    ServiceID,
    ServiceSpec,
    ServiceStatus,
    Status,
    UnsafeInstanceConfig,
)
from fluxrpc.routing.resolver import make_url
from fluxrpc.routing.routes import Route

T = TypeVar("T")

logger = get_logger(__name__)


@lru_cache(maxsize=64)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def encode_body(body: Any) -> bytes:
    """Serialize a request body to compact JSON.

    Pydantic models are dumped by alias. NaN and infinities have no JSON
    representation and are rejected rather than written as bare literals.

    Raises:
        EncodeError: If the value cannot be represented as JSON
    """
    try:
        jsonable = to_jsonable_python(body, by_alias=True)
        return json.dumps(jsonable, allow_nan=False, separators=(",", ":")).encode()
    except (PydanticSerializationError, ValueError) as e:
        raise EncodeError("encoding request body", e) from e


def decode_body(response_type: Any, content: bytes) -> Any:
    """Deserialize a JSON response body into ``response_type``.

    Raises:
        DecodeError: On invalid JSON (including an empty body) or a shape
            that does not validate against ``response_type``
    """
    try:
        return _adapter(response_type).validate_json(content)
    except ValidationError as e:
        raise DecodeError("decoding response from server", e) from e


class RPCClient:
    """Flux service client.

    The client holds no per-call state; it is safe to share between threads
    as long as the injected httpx.Client and token are.

    Attributes:
        endpoint: Base URL of the Flux service API
        routes: Route table used to build request URLs
    """

    def __init__(
        self,
        http_client: httpx.Client,
        routes: Mapping[str, Route],
        endpoint: str,
        token: TokenProtocol,
        *,
        owns_transport: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Blocking transport; its timeout applies to every call
            routes: Route table (name -> Route)
            endpoint: Absolute base URL of the service API
            token: Credential attached to every outgoing request
            owns_transport: Whether close() should close http_client
        """
        self.endpoint = endpoint
        self.routes = routes
        self._http = http_client
        self._token = token
        self._owns_transport = owns_transport

    def __enter__(self) -> RPCClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._http.close()

    # =========================================================================
    # Remote operations
    # =========================================================================

    def list_services(self, namespace: str = "") -> list[ServiceStatus]:
        """List services in a namespace (all namespaces when empty)."""
        result = self.get(list[ServiceStatus] | None, "ListServices", "namespace", namespace)
        return result or []

    def list_images(self, service_spec: ServiceSpec) -> list[ImageStatus]:
        """List images available for the matching services."""
        result = self.get(list[ImageStatus] | None, "ListImages", "service", service_spec)
        return result or []

    def post_release(self, params: ReleaseJobParams) -> JobID:
        """Queue a release job.

        Service specs and exclusions go out as repeated query parameters.

        Returns:
            ID of the queued job, or "" when the server sends no body
        """
        response = self.post_with_response(
            PostReleaseResponse, "PostRelease", None, *params.query_params()
        )
        if response is None:
            return ""
        return response.release_id

    def get_release(self, job_id: JobID) -> Job:
        """Fetch the state of a release job."""
        return self.get(Job, "GetRelease", "id", job_id)

    def automate(self, service_id: ServiceID) -> None:
        """Turn on automated releases for a service."""
        self.post("Automate", "service", service_id)

    def deautomate(self, service_id: ServiceID) -> None:
        """Turn off automated releases for a service."""
        self.post("Deautomate", "service", service_id)

    def lock(self, service_id: ServiceID) -> None:
        """Lock a service against releases."""
        self.post("Lock", "service", service_id)

    def unlock(self, service_id: ServiceID) -> None:
        """Unlock a service."""
        self.post("Unlock", "service", service_id)

    def history(self, service_spec: ServiceSpec) -> list[HistoryEntry]:
        """Fetch the event history for the matching services."""
        result = self.get(list[HistoryEntry] | None, "History", "service", service_spec)
        return result or []

    def get_config(self) -> InstanceConfig:
        """Fetch the instance configuration (secrets redacted by the server)."""
        return self.get(InstanceConfig, "GetConfig")

    def set_config(self, config: UnsafeInstanceConfig) -> None:
        """Replace the instance configuration."""
        self.post_with_body("SetConfig", config)

    def generate_deploy_key(self) -> None:
        """Ask the service to generate a new deploy key."""
        self.post("GenerateDeployKeys")

    def status(self) -> Status:
        """Fetch the status of the service, daemon and git repository."""
        return self.get(Status, "Status")

    # =========================================================================
    # Request primitives
    # =========================================================================

    def post(self, route: str, *query_params: str) -> None:
        """POST with query parameters only, response discarded."""
        self.post_with_body(route, None, *query_params)

    def post_with_body(self, route: str, body: Any, *query_params: str) -> None:
        """POST with an optional JSON body, response discarded."""
        self.post_with_response(None, route, body, *query_params)

    def post_with_response(
        self,
        response_type: type[T] | Any,
        route: str,
        body: Any,
        *query_params: str,
    ) -> T | None:
        """POST with an optional JSON body and decode the response.

        The response is decoded only when its body is non-empty. A
        ``response_type`` of None still requires a non-empty body to be
        valid JSON but discards the value.

        Args:
            response_type: Type to decode into, or None to discard
            route: Route name
            body: Value to send as JSON, or None for an empty payload
            *query_params: Flat key/value sequence

        Returns:
            Decoded value, or None for an empty body or a discarded response

        Raises:
            URLConstructionError, EncodeError, RequestConstructionError,
            TransportError, APIError, DecodeError
        """
        with self._span(route) as span:
            url = self._make_url(route, "POST", query_params)

            content = b""
            if body is not None:
                content = encode_body(body)

            request = self._build_request("POST", url, content, is_json=body is not None)
            span.set_attribute("http.method", "POST")
            span.set_attribute("http.url", str(url))

            response = self.execute_request(request, route=route)
            payload = self._read(response)
            if not payload:
                return None
            decoded = decode_body(Any if response_type is None else response_type, payload)
            if response_type is None:
                return None
            return decoded

    def get(self, response_type: type[T] | Any, route: str, *query_params: str) -> T:
        """GET and decode the response body into ``response_type``.

        Decoding is always attempted, so an empty body raises DecodeError.

        Args:
            response_type: Type to decode into
            route: Route name
            *query_params: Flat key/value sequence

        Returns:
            Decoded value

        Raises:
            URLConstructionError, RequestConstructionError, TransportError,
            APIError, DecodeError
        """
        with self._span(route) as span:
            url = self._make_url(route, "GET", query_params)
            request = self._build_request("GET", url)
            span.set_attribute("http.method", "GET")
            span.set_attribute("http.url", str(url))

            response = self.execute_request(request, route=route)
            payload = self._read(response)
            result: T = decode_body(response_type, payload)
            return result

    def execute_request(self, request: httpx.Request, route: str | None = None) -> httpx.Response:
        """Send a request and classify the response status.

        Args:
            request: Fully built request, credential already attached
            route: Route name the request was built from, for log events

        Returns:
            The streamed response, unread, when the status is 200. The caller
            must close it.

        Raises:
            TransportError: If no response was obtained
            APIError: For any status other than 200 (response already closed)
        """
        logger.debug("rpc_request", route=route, method=request.method, url=str(request.url))
        try:
            response = self._http.send(request, stream=True)
        except httpx.TransportError as e:
            raise TransportError("executing HTTP request", e) from e

        trace.get_current_span().set_attribute("http.status_code", response.status_code)
        if response.status_code == httpx.codes.OK:
            return response

        try:
            raw = response.read()
        except (httpx.HTTPError, httpx.StreamError):
            raw = b""
        finally:
            response.close()

        body = raw.decode("utf-8", errors="replace").strip()
        status = f"{response.status_code} {response.reason_phrase}".strip()
        logger.warning(
            "rpc_api_error",
            route=route,
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
        )
        raise APIError(response.status_code, status, body)

    # =========================================================================
    # Helpers
    # =========================================================================

    @contextmanager
    def _span(self, route: str) -> Iterator[trace.Span]:
        # Tracer looked up per call so configure_tracing()/reset_tracing() take effect
        with get_tracer(__name__).start_as_current_span(f"rpc.{route}") as span:
            yield span

    def _make_url(self, route: str, method: str, query_params: tuple[str, ...]) -> httpx.URL:
        try:
            declared = self.routes.get(route)
            if declared is not None and declared.method != method:
                raise RouteConstructionError(
                    f"route {route!r} is {declared.method}, not {method}"
                )
            return make_url(self.endpoint, self.routes, route, *query_params)
        except RouteConstructionError as e:
            raise URLConstructionError("constructing URL", e) from e

    def _build_request(
        self,
        method: str,
        url: httpx.URL,
        content: bytes | None = None,
        is_json: bool = False,
    ) -> httpx.Request:
        headers = {"Content-Type": "application/json"} if is_json else None
        try:
            request = self._http.build_request(method, url, content=content, headers=headers)
        except httpx.InvalidURL as e:
            raise RequestConstructionError(f"constructing request {url}", e) from e
        self._token.set(request)
        return request

    @staticmethod
    def _read(response: httpx.Response) -> bytes:
        """Read the whole body of a 200 response and release it."""
        try:
            return response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise DecodeError("decoding response from server", e) from e
        finally:
            response.close()
