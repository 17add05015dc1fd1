"""Named routes and URL resolution for the Flux service API."""

from fluxrpc.routing.resolver import make_url
from fluxrpc.routing.routes import FLUX_ROUTES, Route, RouteTable

__all__ = ["FLUX_ROUTES", "Route", "RouteTable", "make_url"]
