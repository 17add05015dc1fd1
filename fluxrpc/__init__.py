"""fluxrpc: route-based RPC client for the Flux service API.

Turns a named route plus query parameters into an authenticated HTTP
request, sends it over an injected httpx transport, and decodes the JSON
response into pydantic models. Failures surface as namespaced exceptions
from fluxrpc.core.exceptions.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
