"""
fluxrpc - Structured Logging Module

structlog on top of the standard library ``logging`` module. Loggers from
get_logger() hand their events to ``logging.getLogger(name)``, so until the
host application (or configure_logging()) installs a handler, the package
logs nowhere: ``fluxrpc`` carries a NullHandler and nothing reaches stdout.

Patterns Applied:
- One-time configure_logging() at startup
- structlog stdlib BoundLogger with JSON output

Anti-Patterns Avoided:
- structlog.configure() called per get_logger() - prevented via _configured flag
- Library output on stdout before the host opted in
- Credentials in log events (the client never passes the token to a logger)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict

SERVICE_NAME = "fluxrpc"

logging.getLogger(SERVICE_NAME).addHandler(logging.NullHandler())

# Module-level flag for one-time configuration
_configured: bool = False
_handler: logging.Handler | None = None


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Add client metadata to every log entry.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to modify

    Returns:
        Modified event dictionary with service info
    """
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
) -> None:
    """Route fluxrpc log events to stderr.

    Installs a stderr handler on the ``fluxrpc`` logger only; the root logger
    and any handlers the host configured are left alone. Idempotent: only the
    first call takes effect until reset_logging().

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to use JSON renderer (True for production)
    """
    global _configured, _handler

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(SERVICE_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    _handler = handler

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_info,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # reset_logging() must reach loggers already handed out
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog stdlib BoundLogger proxy writing to ``logging.getLogger(name)``
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def is_configured() -> bool:
    """Return whether configure_logging() has taken effect."""
    return _configured


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured, _handler
    package_logger = logging.getLogger(SERVICE_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    _configured = False
    structlog.reset_defaults()
