"""Service layer: the gateway and its strategies.

Architecture:
    Handler -> Gateway -> Strategies / Lifecycle / Notifications -> Repositories
    (HTTP)     (signals)  (caching policy)                          (storage, network)
"""

from .background import BackgroundTasks
from .classifier import INTERCEPTED_SCHEMES, ResourceClassifier
from .gateway import OfflineCacheGateway
from .lifecycle import CacheLifecycleManager
from .notifications import NotificationService
from .offline_page import offline_response, render_offline_page
from .strategies import (
    CacheFirstStrategy,
    CachingStrategy,
    NetworkFirstStrategy,
    StaleWhileRevalidateStrategy,
)
from .sync import BackgroundSync

__all__ = [
    "BackgroundSync",
    "BackgroundTasks",
    "CacheFirstStrategy",
    "CacheLifecycleManager",
    "CachingStrategy",
    "INTERCEPTED_SCHEMES",
    "NetworkFirstStrategy",
    "NotificationService",
    "OfflineCacheGateway",
    "ResourceClassifier",
    "StaleWhileRevalidateStrategy",
    "offline_response",
    "render_offline_page",
]
