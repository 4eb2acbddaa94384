"""Repository layer for storage, network and host access.

This layer abstracts external dependencies (Redis, the network, the host's
window and notification APIs) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (memory -> Redis, real host -> fakes)
- Unit testing with mock transports
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from offline_gateway.protocols import CacheStorage, ClientRegistry, Fetcher, NotificationHost

from .httpx_fetcher import HOP_BY_HOP_HEADERS, HttpxFetcher
from .memory_clients import InMemoryClientRegistry, InMemoryNotificationCenter, InMemoryWindowClient
from .memory_storage import InMemoryCacheStorage
from .redis_storage import RedisCacheStorage

__all__ = [
    "CacheStorage",
    "ClientRegistry",
    "Fetcher",
    "NotificationHost",
    "HOP_BY_HOP_HEADERS",
    "HttpxFetcher",
    "InMemoryCacheStorage",
    "InMemoryClientRegistry",
    "InMemoryNotificationCenter",
    "InMemoryWindowClient",
    "RedisCacheStorage",
]
