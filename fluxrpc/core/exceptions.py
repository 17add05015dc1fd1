"""
fluxrpc - Custom Exceptions

Error taxonomy for the RPC client. Every failure the client can surface is a
FluxClientError subclass, so callers can catch the whole family or a single
phase.

Patterns Applied:
- Namespaced exceptions: TransportError instead of shadowing ConnectionError
- Stacked context: each wrapper carries one context line and the original
  cause (also chained via ``raise ... from``)

Anti-Patterns Avoided:
- Bare except clauses
- Synthesized API errors (APIError only ever carries the server's answer)
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class FluxClientError(Exception):
    """Base exception for fluxrpc.

    Attributes:
        context: Phase description added by the layer that raised the error
        cause: Underlying exception, if any
    """

    def __init__(self, context: str, cause: BaseException | None = None) -> None:
        """Initialize with a context line and an optional cause.

        Args:
            context: Human-readable description of the failing phase
            cause: Exception being wrapped
        """
        self.context = context
        self.cause = cause
        super().__init__(str(self))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.context, self.cause))

    def __str__(self) -> str:
        """Render as ``context: cause`` when a cause is present."""
        if self.cause is None:
            return self.context
        return f"{self.context}: {self.cause}"

    def chain(self) -> list[str]:
        """Return the messages of the cause chain, outermost first.

        Returns:
            One entry per layer; FluxClientError layers contribute their
            context line, foreign exceptions their ``str()``.
        """
        messages: list[str] = []
        current: BaseException | None = self
        while current is not None:
            if isinstance(current, FluxClientError):
                messages.append(current.context)
                current = current.cause
            else:
                messages.append(str(current))
                current = current.__cause__
        return messages


class ConfigurationError(FluxClientError):
    """Raised when settings are invalid or missing."""


class RouteConstructionError(FluxClientError):
    """Raised when a route name cannot be turned into a URL.

    Always a programmer error (unknown route, odd parameter list, missing
    path value, bad endpoint). Never retryable.
    """


class URLConstructionError(FluxClientError):
    """Raised by the client when URL construction fails for a call."""


class RequestConstructionError(FluxClientError):
    """Raised when httpx refuses to build the outgoing request."""


class EncodeError(FluxClientError):
    """Raised when a request body cannot be serialized to JSON."""


class TransportError(FluxClientError):
    """Raised when the transport fails before any response is obtained.

    Connection refused, timeouts and DNS failures all land here.
    """


class DecodeError(FluxClientError):
    """Raised when a response body cannot be decoded into the expected type."""


class APIError(FluxClientError):
    """Raised when the server answers with any status other than 200.

    Attributes:
        status_code: HTTP status code of the response
        status: Status line text, e.g. "404 Not Found"
        body: Response body text with surrounding whitespace trimmed
    """

    def __init__(self, status_code: int, status: str, body: str) -> None:
        """Initialize APIError from the server's rejection.

        Args:
            status_code: HTTP status code
            status: Status line text
            body: Trimmed response body
        """
        self.status_code = status_code
        self.status = status
        self.body = body
        super().__init__(f"{status} ({body})")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.status_code, self.status, self.body))

    @property
    def is_missing(self) -> bool:
        """True when the server reported the resource as not found."""
        return self.status_code == HTTPStatus.NOT_FOUND
