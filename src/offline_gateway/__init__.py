"""Offline Cache Gateway - offline caching for the Language of Wearing survey app.

This package provides a layered architecture for request interception:

Layers:
    - protocols: Interface contracts (CacheStorage, Fetcher, ClientRegistry, ...)
    - repositories: Storage, network and host implementations
    - services: Caching strategies, cache lifecycle, notifications
    - handlers: HTTP host adapter
    - dto: Data transfer objects (control API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from offline_gateway.services import OfflineCacheGateway

    gateway = OfflineCacheGateway.create()
    await gateway.install()
    await gateway.activate()
    ```

For the HTTP host:
    ```python
    from offline_gateway.api.app import app
    ```
"""

from offline_gateway.config import Settings, configure_logging, get_redis_client, settings
from offline_gateway.entities import GatewayRequest, GatewayResponse, Notification, StrategyKind, WorkerState
from offline_gateway.errors import (
    CacheStorageError,
    GatewayError,
    InstallError,
    LifecycleError,
    NetworkError,
    PushPayloadError,
)
from offline_gateway.handlers import GatewayHandler
from offline_gateway.protocols import CacheStorage, ClientRegistry, Fetcher, GatewayEventHandler, NotificationHost
from offline_gateway.repositories import (
    HttpxFetcher,
    InMemoryCacheStorage,
    InMemoryClientRegistry,
    InMemoryNotificationCenter,
    RedisCacheStorage,
)
from offline_gateway.services import OfflineCacheGateway, ResourceClassifier

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "configure_logging",
    "get_redis_client",
    # Errors
    "GatewayError",
    "InstallError",
    "NetworkError",
    "CacheStorageError",
    "LifecycleError",
    "PushPayloadError",
    # Protocols (interfaces)
    "CacheStorage",
    "ClientRegistry",
    "Fetcher",
    "GatewayEventHandler",
    "NotificationHost",
    # Services
    "OfflineCacheGateway",
    "ResourceClassifier",
    # Handlers (HTTP)
    "GatewayHandler",
    # Repositories
    "HttpxFetcher",
    "InMemoryCacheStorage",
    "InMemoryClientRegistry",
    "InMemoryNotificationCenter",
    "RedisCacheStorage",
    # Entities
    "GatewayRequest",
    "GatewayResponse",
    "Notification",
    "StrategyKind",
    "WorkerState",
]
