"""FastAPI host for the offline cache gateway.

Every request that is not a control endpoint is treated as a request for
the configured origin and answered through the gateway.
"""

from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from offline_gateway.api.dependencies import GatewayFactory, HandlerDep, lifespan
from offline_gateway.config import settings
from offline_gateway.dto import (
    ActivateResponse,
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

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(gateway_factory: GatewayFactory | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        gateway_factory: Builds the gateway at startup. Defaults to
            OfflineCacheGateway.create with the global settings.

    Returns:
        The application
    """
    app = FastAPI(
        title="Offline Cache Gateway",
        description="Offline caching gateway for the Language of Wearing survey app",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.gateway_factory = gateway_factory

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/_gateway")
    async def root() -> dict[str, Any]:
        """Control API information."""
        return {
            "name": "Offline Cache Gateway",
            "version": settings.app_version,
            "endpoints": {
                "status": "/_gateway/status",
                "health": "/_gateway/health",
                "caches": "/_gateway/caches",
                "docs": "/docs",
            },
        }

    @app.get("/_gateway/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        return await handler.health_check()

    @app.get("/_gateway/status", response_model=StatusResponse)
    async def gateway_status(handler: HandlerDep) -> StatusResponse:
        return await handler.status()

    @app.post("/_gateway/install", response_model=InstallResponse)
    async def install(handler: HandlerDep, request: InstallRequest | None = None) -> InstallResponse:
        return await handler.install(request or InstallRequest())

    @app.post("/_gateway/activate", response_model=ActivateResponse)
    async def activate(handler: HandlerDep) -> ActivateResponse:
        return await handler.activate()

    @app.post("/_gateway/sync", response_model=SyncResponse)
    async def sync(request: SyncRequest, handler: HandlerDep) -> SyncResponse:
        return await handler.sync(request)

    @app.post("/_gateway/push", response_model=NotificationItem)
    async def push(request: PushRequest, handler: HandlerDep) -> NotificationItem:
        return await handler.push(request)

    @app.get("/_gateway/notifications", response_model=list[NotificationItem])
    async def notifications(handler: HandlerDep) -> list[NotificationItem]:
        return handler.list_notifications()

    @app.post("/_gateway/notifications/{index}/click", response_model=NotificationClickResponse)
    async def click_notification(
        index: int,
        handler: HandlerDep,
        request: NotificationClickRequest | None = None,
    ) -> NotificationClickResponse:
        return await handler.click_notification(index, request or NotificationClickRequest())

    @app.get("/_gateway/caches", response_model=CachesResponse)
    async def caches(handler: HandlerDep) -> CachesResponse:
        return await handler.list_caches()

    @app.get("/_gateway/classify", response_model=ClassifyResponse)
    async def classify(url: str, handler: HandlerDep) -> ClassifyResponse:
        return handler.classify(url)

    @app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(path: str, request: Request, handler: HandlerDep) -> Response:
        return await handler.proxy(request, path)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "offline_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
