"""
fluxrpc - Request Credentials

The client treats credentials as an opaque capability: it calls
``token.set(request)`` once per outgoing request and nothing else.
How the credential is encoded (header, query, cookie) is up to the token.
"""

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class TokenProtocol(Protocol):
    """Capability that attaches authentication to an outgoing request."""

    def set(self, request: httpx.Request) -> None:
        """Mutate the request in place to carry credentials."""
        ...


class ScopeProbeToken:
    """Flux service token sent as ``Authorization: Scope-Probe token=<value>``.

    An empty token attaches nothing, so unauthenticated local instances work
    with the default settings.
    """

    def __init__(self, value: str = "") -> None:
        self._value = value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __repr__(self) -> str:
        return f"ScopeProbeToken({'***' if self._value else ''!r})"

    def set(self, request: httpx.Request) -> None:
        if self._value:
            request.headers["Authorization"] = f"Scope-Probe token={self._value}"
