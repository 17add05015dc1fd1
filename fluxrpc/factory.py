"""
fluxrpc - Client Factory

Wires Settings into a ready RPCClient: configures logging (and tracing when
enabled), builds the httpx transport with the configured timeout, and binds
the Flux route table and token.
"""

from urllib.parse import urlsplit

import httpx

from fluxrpc.clients.credentials import ScopeProbeToken
from fluxrpc.clients.rpc_client import RPCClient
from fluxrpc.core.config import Settings, get_settings
from fluxrpc.core.exceptions import ConfigurationError
from fluxrpc.core.logging import configure_logging, get_logger
from fluxrpc.core.tracing import configure_tracing
from fluxrpc.routing.routes import FLUX_ROUTES

logger = get_logger(__name__)


def create_client(settings: Settings | None = None) -> RPCClient:
    """Build a client that owns its transport.

    Args:
        settings: Client settings; read from the environment when omitted

    Returns:
        RPCClient; close it (or use it as a context manager) when done

    Raises:
        ConfigurationError: If the endpoint URL is empty or not http(s)
    """
    settings = settings or get_settings()

    url = settings.url.strip()
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"FLUX_URL must be an absolute http(s) URL, got {url!r}")

    configure_logging(log_level=settings.log_level, json_output=settings.log_json)
    if settings.tracing_enabled:
        configure_tracing(console_export=settings.tracing_console_export)

    token = ScopeProbeToken(settings.token)
    http_client = httpx.Client(timeout=httpx.Timeout(settings.timeout))
    logger.info(
        "client_created",
        endpoint=url,
        timeout=settings.timeout,
        authenticated=bool(token),
    )
    return RPCClient(
        http_client,
        FLUX_ROUTES,
        url,
        token,
        owns_transport=True,
    )
