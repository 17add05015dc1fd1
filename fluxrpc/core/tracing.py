"""
fluxrpc - OpenTelemetry Tracing Module

One span per RPC round trip, named after the route (``rpc.ListServices``)
and carrying ``http.method``, ``http.url`` and ``http.status_code``.

Without configure_tracing(), spans go to whatever tracer provider the host
application installed globally (the no-op provider if none). With it, the
client records into its own TracerProvider and never touches the global one,
which OpenTelemetry allows to be set only once per process.

Patterns Applied:
- One-time configure_tracing() at startup
- Minimal manual instrumentation
- Injectable SpanExporter (InMemorySpanExporter in tests)
"""

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from fluxrpc import __version__

SERVICE_NAME = "fluxrpc"

# Provider owned by this package; None until configure_tracing()
_provider: TracerProvider | None = None


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = False,
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Give the client its own tracer provider.

    Idempotent: until reset_tracing(), later calls return the provider from
    the first call and ignore their arguments.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
        exporter: Additional exporter fed through a SimpleSpanProcessor

    Returns:
        The active TracerProvider
    """
    global _provider

    if _provider is not None:
        return _provider

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))

    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer from the configured provider, else from the global one.

    Args:
        name: Tracer name (typically module name)
    """
    if _provider is not None:
        return _provider.get_tracer(name, __version__)
    return trace.get_tracer(name, __version__)


def is_configured() -> bool:
    """Return whether configure_tracing() has taken effect."""
    return _provider is not None


def reset_tracing() -> None:
    """Shut down the package's provider and fall back to the global one.

    A later configure_tracing() builds a fresh provider.
    """
    global _provider
    if _provider is not None:
        _provider.shutdown()
    _provider = None
