"""
fluxrpc - Route Table

Named routes of the Flux service API. A route binds an operation name to an
HTTP method and a path template; placeholders in the template use
``{name}`` syntax and are filled from the call's parameter pairs.

Patterns Applied:
- Immutable value objects (frozen dataclasses)
- Route table injected into the client, never looked up from global state
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Final

import httpx

_PLACEHOLDER: Final[re.Pattern[str]] = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class Route:
    """A named operation mapped to a URL path template.

    Attributes:
        name: Route name used by the client (e.g. "ListServices")
        method: HTTP verb
        path: Path template, absolute, with optional ``{name}`` placeholders
    """

    name: str
    method: str
    path: str
    placeholders: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"route {self.name!r}: path must start with '/'")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(
            self, "placeholders", tuple(_PLACEHOLDER.findall(self.path))
        )

    def expand(self, values: Mapping[str, str]) -> str:
        """Substitute placeholder values into the path template.

        Values must already be percent-encoded.
        """
        return _PLACEHOLDER.sub(lambda m: values[m.group(1)], self.path)


class RouteTable(Mapping[str, Route]):
    """Immutable name -> Route lookup."""

    def __init__(self, routes: Iterable[Route]) -> None:
        table: dict[str, Route] = {}
        for route in routes:
            if route.name in table:
                raise ValueError(f"duplicate route name {route.name!r}")
            table[route.name] = route
        self._routes = table

    def __getitem__(self, name: str) -> Route:
        return self._routes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({sorted(self._routes)!r})"

    def url_for(self, endpoint: str, name: str, *query_params: str) -> httpx.URL:
        """Resolve a route of this table against an endpoint.

        See fluxrpc.routing.resolver.make_url.
        """
        from fluxrpc.routing.resolver import make_url

        return make_url(endpoint, self, name, *query_params)


# =============================================================================
# Flux service routes
# =============================================================================

FLUX_ROUTES: Final[RouteTable] = RouteTable(
    [
        Route("ListServices", "GET", "/v3/services"),
        Route("ListImages", "GET", "/v3/images"),
        Route("PostRelease", "POST", "/v4/release"),
        Route("GetRelease", "GET", "/v4/release/{id}"),
        Route("Automate", "POST", "/v3/automate"),
        Route("Deautomate", "POST", "/v3/deautomate"),
        Route("Lock", "POST", "/v3/lock"),
        Route("Unlock", "POST", "/v3/unlock"),
        Route("History", "GET", "/v3/history"),
        Route("GetConfig", "GET", "/v4/config"),
        Route("SetConfig", "POST", "/v4/config"),
        Route("GenerateDeployKeys", "POST", "/v5/config/deploy-keys"),
        Route("Status", "GET", "/v4/status"),
    ]
)
