"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Gateway and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from offline_gateway.config import configure_logging
from offline_gateway.errors import InstallError
from offline_gateway.handlers import GatewayHandler
from offline_gateway.services import OfflineCacheGateway

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[], OfflineCacheGateway]


def get_gateway(request: Request) -> OfflineCacheGateway:
    """Dependency injection for OfflineCacheGateway from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The OfflineCacheGateway instance from app.state

    Raises:
        RuntimeError: If the gateway is not initialized
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("OfflineCacheGateway not initialized. Check lifespan setup.")
    return gateway


def get_handler(request: Request) -> GatewayHandler:
    """Dependency injection for GatewayHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GatewayHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "gateway_handler", None)
    if handler is None:
        raise RuntimeError("GatewayHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Gateway (policy + repositories) - app.state.gateway
    2. Handler (HTTP endpoints) - app.state.gateway_handler

    Then runs install and activate. A failed install is logged and the app
    keeps passing requests straight through until a later
    POST /_gateway/install succeeds.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Drains background work, closes the gateway and removes it from app.state
    """
    factory: GatewayFactory = getattr(app.state, "gateway_factory", None) or OfflineCacheGateway.create
    gateway = factory()
    configure_logging(gateway.config.log_level)

    app.state.gateway = gateway
    app.state.gateway_handler = GatewayHandler(gateway=gateway)

    try:
        await gateway.install()
        await gateway.activate()
        logger.info("Gateway controlling requests for %s", gateway.config.origin_url)
    except InstallError as e:
        logger.error("Install failed, passing requests through until a retry succeeds: %s", e)

    yield

    await gateway.close()
    del app.state.gateway_handler
    del app.state.gateway
    logger.info("Gateway shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[GatewayHandler, Depends(get_handler)]
GatewayDep = Annotated[OfflineCacheGateway, Depends(get_gateway)]
