"""HTTP handlers for the gateway host.

Handlers convert between HTTP/DTOs and gateway calls. They handle HTTP
concerns like status codes, header filtering and error translation.
"""

import logging
from urllib.parse import urlparse

from fastapi import HTTPException, Request, Response, status

from offline_gateway.dto import (
    ActivateResponse,
    CacheStoreItem,
    CachesResponse,
    ClassifyResponse,
    HealthCheckResponse,
    InstallRequest,
    InstallResponse,
    NotificationClickRequest,
    NotificationClickResponse,
    NotificationItem,
    PushRequest,
    StatusResponse,
    SyncRequest,
    SyncResponse,
)
from offline_gateway.entities import GatewayRequest, GatewayResponse, Notification
from offline_gateway.errors import CacheStorageError, InstallError, LifecycleError, NetworkError, PushPayloadError
from offline_gateway.repositories import HOP_BY_HOP_HEADERS, InMemoryNotificationCenter
from offline_gateway.services import INTERCEPTED_SCHEMES, OfflineCacheGateway

logger = logging.getLogger(__name__)

# The body is re-sent decoded and with a fresh length.
STRIPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-encoding"}

STRATEGY_HEADER = "X-Gateway-Strategy"


def is_navigation_request(request: Request) -> bool:
    """Detect a top-level document load from fetch metadata headers."""
    dest = request.headers.get("sec-fetch-dest")
    mode = request.headers.get("sec-fetch-mode")
    if dest is not None or mode is not None:
        return dest == "document" or mode == "navigate"
    return request.method == "GET" and "text/html" in request.headers.get("accept", "")


class GatewayHandler:
    """HTTP handlers for the gateway host.

    Example:
        ```python
        gateway = OfflineCacheGateway.create()
        handler = GatewayHandler(gateway=gateway)

        @app.api_route("/{path:path}", methods=["GET"])
        async def proxy(request: Request, path: str):
            return await handler.proxy(request, path)
        ```
    """

    def __init__(self, gateway: OfflineCacheGateway) -> None:
        """Initialize the gateway handler.

        Args:
            gateway: The gateway answering intercepted requests (required).
        """
        self._gateway = gateway

    @property
    def notification_center(self) -> InMemoryNotificationCenter | None:
        host = self._gateway.notification_host
        return host if isinstance(host, InMemoryNotificationCenter) else None

    async def build_request(self, request: Request, path: str) -> GatewayRequest:
        """Translate an incoming HTTP request into a gateway request.

        The URL is rebuilt against the configured origin so cache keys are
        stable whatever host name the client used.
        """
        url = f"{self._gateway.config.origin_url.rstrip('/')}/{path.lstrip('/')}"
        if request.url.query:
            url = f"{url}?{request.url.query}"

        body = await request.body()
        navigation = is_navigation_request(request)
        return GatewayRequest(
            url=url,
            method=request.method,
            headers=dict(request.headers),
            body=body or None,
            destination="document" if navigation else request.headers.get("sec-fetch-dest", ""),
            mode="navigate" if navigation else request.headers.get("sec-fetch-mode", ""),
        )

    async def proxy(self, request: Request, path: str) -> Response:
        """Handle any request addressed to the proxied origin.

        Raises:
            HTTPException: 504 when the network failed and nothing could stand in
        """
        gateway_request = await self.build_request(request, path)

        try:
            response = await self._gateway.fetch(gateway_request)
            strategy = None
            if response is None:
                response = await self._gateway.fetcher.fetch(gateway_request)
            else:
                strategy = self._gateway.classify(gateway_request.url).value
        except NetworkError as e:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail=f"Network unavailable: {e}",
            ) from e

        return self.to_http_response(response, strategy)

    @staticmethod
    def to_http_response(response: GatewayResponse, strategy: str | None = None) -> Response:
        headers = {k: v for k, v in response.headers.items() if k.lower() not in STRIPPED_RESPONSE_HEADERS}
        if strategy is not None:
            headers[STRATEGY_HEADER] = strategy
        return Response(content=response.body, status_code=response.status, headers=headers)

    async def install(self, request: InstallRequest) -> InstallResponse:
        """Handle POST /_gateway/install requests.

        A successful install is followed by activation, as the new version
        skips waiting.

        Raises:
            HTTPException: 503 if pre-caching failed
        """
        try:
            count = await self._gateway.install(request.resources)
            await self._gateway.activate()
        except InstallError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={"message": str(e), "failed": e.failed},
            ) from e

        return InstallResponse(
            success=True,
            cached_count=count,
            static_cache=self._gateway.config.static_cache_name,
            message="Static resources cached",
        )

    async def activate(self) -> ActivateResponse:
        """Handle POST /_gateway/activate requests.

        Raises:
            HTTPException: 409 if no install has completed
        """
        try:
            deleted = await self._gateway.activate()
        except LifecycleError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

        return ActivateResponse(
            success=True,
            deleted=deleted,
            static_cache=self._gateway.config.static_cache_name,
            dynamic_cache=self._gateway.config.dynamic_cache_name,
        )

    async def sync(self, request: SyncRequest) -> SyncResponse:
        """Handle POST /_gateway/sync requests."""
        handled = await self._gateway.sync(request.tag)
        return SyncResponse(tag=request.tag, handled=handled)

    async def push(self, request: PushRequest) -> NotificationItem:
        """Handle POST /_gateway/push requests.

        Raises:
            HTTPException: 422 if the payload cannot be decoded
        """
        payload = request.model_dump_json(exclude_none=True).encode("utf-8")
        try:
            notification = await self._gateway.push(payload)
        except PushPayloadError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

        center = self.notification_center
        index = len(center.notifications) - 1 if center else 0
        return self._to_item(index, notification)

    def list_notifications(self) -> list[NotificationItem]:
        """Handle GET /_gateway/notifications requests."""
        center = self.notification_center
        if center is None:
            return []
        return [self._to_item(i, n) for i, n in enumerate(center.get_notifications(include_closed=True))]

    async def click_notification(self, index: int, request: NotificationClickRequest) -> NotificationClickResponse:
        """Handle POST /_gateway/notifications/{index}/click requests.

        Raises:
            HTTPException: 404 if no notification has that index
        """
        center = self.notification_center
        if center is None or not 0 <= index < len(center.notifications):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No notification #{index}")

        client = await self._gateway.notification_click(center.notifications[index], request.action)
        return NotificationClickResponse(
            action=request.action,
            client_url=client.url if client is not None else None,
            focused=client is not None,
        )

    async def list_caches(self) -> CachesResponse:
        """Handle GET /_gateway/caches requests.

        Raises:
            HTTPException: 500 if the storage cannot be read
        """
        config = self._gateway.config
        storage = self._gateway.storage
        try:
            items = []
            for name in await storage.keys():
                entries = await storage.entries(name)
                items.append(
                    CacheStoreItem(
                        name=name,
                        current=name in (config.static_cache_name, config.dynamic_cache_name),
                        entry_count=len(entries),
                        entries=[f"{method} {url}" for method, url in entries],
                    )
                )
        except CacheStorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to list caches: {e}",
            ) from e

        return CachesResponse(caches=items)

    def classify(self, url: str) -> ClassifyResponse:
        """Handle GET /_gateway/classify requests."""
        if urlparse(url).scheme.lower() not in INTERCEPTED_SCHEMES:
            return ClassifyResponse(url=url, strategy=None, intercepted=False)
        return ClassifyResponse(url=url, strategy=self._gateway.classify(url).value, intercepted=True)

    async def status(self) -> StatusResponse:
        """Handle GET /_gateway/status requests."""
        try:
            summary = await self._gateway.describe()
        except CacheStorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to describe gateway: {e}",
            ) from e
        return StatusResponse(**summary)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /_gateway/health requests."""
        try:
            await self._gateway.storage.keys()
            storage_healthy = True
        except CacheStorageError as e:
            logger.warning("Storage health check failed: %s", e)
            storage_healthy = False

        return HealthCheckResponse(
            status="healthy" if storage_healthy else "unhealthy",
            storage_healthy=storage_healthy,
            controlling=self._gateway.is_controlling,
        )

    @staticmethod
    def _to_item(index: int, notification: Notification | None) -> NotificationItem:
        if notification is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Push carried no payload")
        return NotificationItem(
            index=index,
            title=notification.title,
            body=notification.body,
            icon=notification.icon,
            badge=notification.badge,
            url=notification.data.get("url", "/"),
            actions=[a.action for a in notification.actions],
            closed=notification.closed,
        )
