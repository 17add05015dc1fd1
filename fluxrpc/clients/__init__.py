"""
Flux service RPC client.

Route-based HTTP client with pluggable transport and credentials.
"""

from fluxrpc.clients.credentials import ScopeProbeToken, TokenProtocol
from fluxrpc.clients.protocols import ClientServiceProtocol
from fluxrpc.clients.rpc_client import RPCClient, decode_body, encode_body

__all__ = [
    "ClientServiceProtocol",
    "RPCClient",
    "ScopeProbeToken",
    "TokenProtocol",
    "decode_body",
    "encode_body",
]
