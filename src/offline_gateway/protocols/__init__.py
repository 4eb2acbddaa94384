"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory -> Redis, httpx -> anything)
- Unit testing with fake hosts and transports
- Clear separation between the gateway and the runtime that hosts it

Usage:
    ```python
    from offline_gateway.protocols import CacheStorage, Fetcher

    storage: CacheStorage = InMemoryCacheStorage()
    storage: CacheStorage = RedisCacheStorage.create()
    ```
"""

from .cache_storage import CacheStorage
from .clients import ClientRegistry, NotificationHost, WindowClient
from .event_handler import GatewayEventHandler
from .fetcher import Fetcher

__all__ = [
    "CacheStorage",
    "ClientRegistry",
    "Fetcher",
    "GatewayEventHandler",
    "NotificationHost",
    "WindowClient",
]
