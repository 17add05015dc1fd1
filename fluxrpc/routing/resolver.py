"""
fluxrpc - Route Resolver

Builds absolute request URLs from a route name and a flat list of
key/value parameters.

Parameters are given as an even-length sequence (key1, value1, key2, ...).
Pairs whose key names a path placeholder fill that placeholder (first pair
wins); every other pair becomes a query parameter. Query order and
duplicate keys are preserved: ("service", "a", "service", "b") encodes as
``service=a&service=b``.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from fluxrpc.core.exceptions import RouteConstructionError
from fluxrpc.routing.routes import Route


def pair_params(query_params: tuple[str, ...]) -> list[tuple[str, str]]:
    """Split a flat parameter sequence into (key, value) pairs.

    Raises:
        RouteConstructionError: On odd length or non-string items
    """
    if len(query_params) % 2 != 0:
        raise RouteConstructionError(
            f"query parameters must come in key/value pairs, got {len(query_params)} items"
        )
    for item in query_params:
        if not isinstance(item, str):
            raise RouteConstructionError(
                f"query parameter {item!r} is {type(item).__name__}, expected str"
            )
    return list(zip(query_params[0::2], query_params[1::2]))


def make_url(
    endpoint: str,
    routes: Mapping[str, Route],
    route_name: str,
    *query_params: str,
) -> httpx.URL:
    """Resolve a named route against the service endpoint.

    Args:
        endpoint: Absolute base URL; its path prefixes every route path
        routes: Route table
        route_name: Name of the route to resolve
        *query_params: Flat key/value sequence

    Returns:
        Absolute URL. Identical inputs always produce the identical URL.

    Raises:
        RouteConstructionError: Unknown route, malformed parameters,
            missing path value, or an endpoint that is not absolute http(s)
    """
    base = urlsplit(endpoint)
    if base.scheme not in ("http", "https") or not base.netloc:
        raise RouteConstructionError(f"endpoint {endpoint!r} is not an absolute http(s) URL")

    route = routes.get(route_name)
    if route is None:
        raise RouteConstructionError(f"no route named {route_name!r}")

    pairs = pair_params(query_params)

    path_values: dict[str, str] = {}
    query: list[tuple[str, str]] = []
    for key, value in pairs:
        if key in route.placeholders and key not in path_values:
            path_values[key] = quote(value, safe="")
        else:
            query.append((key, value))

    missing = [name for name in route.placeholders if name not in path_values]
    if missing:
        raise RouteConstructionError(
            f"route {route_name!r} is missing path values for {', '.join(missing)}"
        )

    path = base.path.rstrip("/") + route.expand(path_values)
    query_string = str(httpx.QueryParams(query)) if query else ""
    return httpx.URL(urlunsplit((base.scheme, base.netloc, path, query_string, "")))
