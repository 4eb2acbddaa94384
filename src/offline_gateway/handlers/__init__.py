"""Handler layer for HTTP endpoints.

The handler is the host adapter: it turns incoming HTTP requests into
gateway signals and gateway results back into HTTP responses.
Handlers depend on the gateway service, not directly on repositories.

Architecture:
    Handler -> Gateway -> Repository
    (HTTP)  -> (Policy) -> (Storage / Network)
"""

from .gateway_handler import GatewayHandler

__all__ = [
    "GatewayHandler",
]
