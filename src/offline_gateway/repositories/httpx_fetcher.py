"""httpx-based network fetcher.

Issues the gateway's network requests with an ``httpx.AsyncClient``.
Redirects are followed, as a browser fetch does. Any HTTP status is a
successful fetch; only transport-level failures raise NetworkError.

The gateway imposes no timeout of its own: the client's timeout is the
transport's timeout.
"""

import logging

import httpx

from offline_gateway.config import settings
from offline_gateway.entities import GatewayRequest, GatewayResponse
from offline_gateway.errors import NetworkError

logger = logging.getLogger(__name__)

# Connection-scoped headers that must not be forwarded between hops.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
    }
)


class HttpxFetcher:
    """httpx implementation of the Fetcher protocol.

    This class satisfies the Fetcher protocol through structural typing -
    no explicit inheritance needed.

    Example:
        ```python
        fetcher = HttpxFetcher.create()
        response = await fetcher.fetch(GatewayRequest(url="https://example.com/"))
        print(response.status)
        await fetcher.close()
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.fetch_timeout.
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests).
        """
        self._timeout = timeout or settings.fetch_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxFetcher":
        """Factory method to create HttpxFetcher with defaults.

        Args:
            timeout: Timeout in seconds. If None, uses settings.
            transport: Optional custom transport.

        Returns:
            Configured HttpxFetcher
        """
        return cls(timeout=timeout, transport=transport)

    async def fetch(self, request: GatewayRequest) -> GatewayResponse:
        """Send a request and buffer the whole response.

        Args:
            request: The request to send

        Returns:
            The response, whatever its status

        Raises:
            NetworkError: If the request could not be completed
        """
        headers = {k: v for k, v in request.headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}

        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("Fetch failed for %s: %s", request.url, e)
            raise NetworkError(request.url, f"Network request failed: {e}") from e

        return GatewayResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=str(response.url),
            reason=response.reason_phrase,
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
