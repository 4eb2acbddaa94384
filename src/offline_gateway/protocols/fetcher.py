"""Network fetch protocol."""

from typing import Protocol, runtime_checkable

from offline_gateway.entities import GatewayRequest, GatewayResponse


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for the network side of the gateway.

    A fetch that yields any HTTP response (including 4xx/5xx) succeeds; only
    a request that never gets a response fails, with NetworkError.
    """

    async def fetch(self, request: GatewayRequest) -> GatewayResponse:
        """Send a request over the network.

        Args:
            request: The request to send

        Returns:
            The fully buffered response

        Raises:
            NetworkError: If no response could be obtained
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...
