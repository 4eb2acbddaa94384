"""The offline cache gateway.

Sits between a host (browser runtime, HTTP proxy, tests) and the network.
The host delivers lifecycle, fetch, sync and push signals; the gateway
answers them with the strategies, the lifecycle manager and the
notification service.
"""

import logging

from offline_gateway.config import Settings, settings
from offline_gateway.entities import GatewayRequest, GatewayResponse, Notification, StrategyKind, WorkerState
from offline_gateway.protocols import CacheStorage, ClientRegistry, Fetcher, NotificationHost, WindowClient
from offline_gateway.repositories import (
    HttpxFetcher,
    InMemoryCacheStorage,
    InMemoryClientRegistry,
    InMemoryNotificationCenter,
    RedisCacheStorage,
)

from .background import BackgroundTasks
from .classifier import INTERCEPTED_SCHEMES, ResourceClassifier
from .lifecycle import CacheLifecycleManager
from .notifications import NotificationService
from .strategies import (
    CacheFirstStrategy,
    CachingStrategy,
    NetworkFirstStrategy,
    StaleWhileRevalidateStrategy,
)
from .sync import BackgroundSync

logger = logging.getLogger(__name__)


class OfflineCacheGateway:
    """Request-interception layer with versioned cache stores.

    The gateway depends on PROTOCOLS, not concrete implementations:
    - CacheStorage: in-memory, Redis, ...
    - Fetcher: httpx or a fake transport
    - ClientRegistry / NotificationHost: the host's windows and notifications

    Example:
        ```python
        from offline_gateway.services import OfflineCacheGateway

        gateway = OfflineCacheGateway.create()
        await gateway.install()
        await gateway.activate()
        response = await gateway.fetch(GatewayRequest(url="http://localhost:3000/"))
        ```
    """

    def __init__(
        self,
        storage: CacheStorage,
        fetcher: Fetcher,
        clients: ClientRegistry,
        notification_host: NotificationHost,
        config: Settings | None = None,
        classifier: ResourceClassifier | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            storage: Cache store registry (required).
            fetcher: Network access (required).
            clients: Client registry (required).
            notification_host: Notification renderer (required).
            config: Settings. Defaults to the global settings.
            classifier: URL classifier. Defaults to the standard patterns.
        """
        self._config = config or settings
        self._storage = storage
        self._fetcher = fetcher
        self._clients = clients
        self._notification_host = notification_host
        self._classifier = classifier or ResourceClassifier()
        self._background = BackgroundTasks()

        self._lifecycle = CacheLifecycleManager(storage, fetcher, clients, self._config)
        self._sync = BackgroundSync(self._config.sync_tag)
        self._notifications = NotificationService(
            host=notification_host,
            clients=clients,
            origin_url=self._config.origin_url,
            app_name=self._config.app_name,
            default_title=self._config.notification_title,
            icon=self._config.notification_icon,
            badge=self._config.notification_badge,
        )

        stores = (storage, fetcher, self._config.static_cache_name, self._config.dynamic_cache_name)
        self._strategies: dict[StrategyKind, CachingStrategy] = {
            StrategyKind.NETWORK_FIRST: NetworkFirstStrategy(*stores, app_name=self._config.app_name),
            StrategyKind.CACHE_FIRST: CacheFirstStrategy(*stores),
            StrategyKind.STALE_WHILE_REVALIDATE: StaleWhileRevalidateStrategy(*stores, background=self._background),
        }

        logger.info("%s gateway - version %s", self._config.app_name, self._config.app_version)
        logger.info("Cache strategy - network-first for APIs, cache-first for static assets")

    @classmethod
    def create(
        cls,
        config: Settings | None = None,
        storage: CacheStorage | None = None,
        fetcher: Fetcher | None = None,
        clients: ClientRegistry | None = None,
        notification_host: NotificationHost | None = None,
    ) -> "OfflineCacheGateway":
        """Factory method to create a gateway with default collaborators.

        The storage backend follows ``config.storage_backend``; the other
        collaborators default to httpx and the in-memory host.

        Args:
            config: Settings. If None, uses the global settings.
            storage: Override the cache storage.
            fetcher: Override the fetcher.
            clients: Override the client registry.
            notification_host: Override the notification host.

        Returns:
            Configured OfflineCacheGateway
        """
        config = config or settings
        if storage is None:
            if config.storage_backend == "redis":
                storage = RedisCacheStorage.create(config)
            else:
                storage = InMemoryCacheStorage()

        return cls(
            storage=storage,
            fetcher=fetcher or HttpxFetcher.create(timeout=config.fetch_timeout),
            clients=clients or InMemoryClientRegistry(),
            notification_host=notification_host or InMemoryNotificationCenter(),
            config=config,
        )

    async def install(self, resources: list[str] | None = None) -> int:
        """Handle the install signal: pre-cache the application shell.

        Raises:
            InstallError: If pre-caching failed; a later install may retry
        """
        return await self._lifecycle.install(resources)

    async def activate(self) -> list[str]:
        """Handle the activate signal: prune old stores, claim clients.

        Raises:
            LifecycleError: If called before a successful install
        """
        return await self._lifecycle.activate()

    def classify(self, url: str) -> StrategyKind:
        return self._classifier.classify(url)

    async def fetch(self, request: GatewayRequest) -> GatewayResponse | None:
        """Handle an intercepted request.

        Args:
            request: The intercepted request

        Returns:
            The response, or None when the request is left to the host
            (non-network scheme, or gateway not yet active)

        Raises:
            NetworkError: For cache-first and stale-while-revalidate misses
                and non-navigation network-first misses while offline
        """
        if request.scheme not in INTERCEPTED_SCHEMES:
            logger.debug("Skipping %s request: %s", request.scheme, request.url)
            return None
        if not self.is_controlling:
            return None

        strategy = self._strategies[self.classify(request.url)]
        return await strategy.handle(request)

    async def sync(self, tag: str) -> bool:
        """Handle a background sync signal.

        Returns:
            True if the tag is the form-data sync tag
        """
        if not self._sync.handles(tag):
            logger.debug("Ignoring sync tag %s", tag)
            return False
        logger.info("Background sync triggered")
        await self._sync.flush()
        return True

    async def push(self, payload: bytes | str | None) -> Notification | None:
        """Handle a push message by rendering its notification."""
        return await self._notifications.push(payload)

    async def notification_click(
        self,
        notification: Notification,
        action: str = "",
    ) -> WindowClient | None:
        """Handle a click on a notification."""
        return await self._notifications.notification_click(notification, action)

    async def drain(self) -> None:
        """Wait for background revalidations to finish."""
        await self._background.drain()

    async def close(self) -> None:
        """Drain background work and release the fetcher and storage."""
        await self.drain()
        await self._fetcher.close()
        await self._storage.close()

    async def describe(self) -> dict:
        """Summarize version, state and stores."""
        return {
            "app_name": self._config.app_name,
            "version": self._config.cache_version,
            "state": self.state.value,
            "controlling": self.is_controlling,
            "static_cache": self._config.static_cache_name,
            "dynamic_cache": self._config.dynamic_cache_name,
            "caches": await self._storage.keys(),
            "pending_background_tasks": self.pending_background_tasks,
        }

    @property
    def state(self) -> WorkerState:
        return self._lifecycle.state

    @property
    def skip_waiting(self) -> bool:
        return self._lifecycle.skip_waiting

    @property
    def pending_background_tasks(self) -> int:
        """Number of background revalidations still running."""
        return len(self._background)

    @property
    def is_controlling(self) -> bool:
        """True once activated; only then are requests intercepted."""
        return self._lifecycle.state is WorkerState.ACTIVATED

    @property
    def config(self) -> Settings:
        return self._config

    @property
    def classifier(self) -> ResourceClassifier:
        return self._classifier

    @property
    def storage(self) -> CacheStorage:
        """Get the underlying storage (for testing)."""
        return self._storage

    @property
    def fetcher(self) -> Fetcher:
        """Get the underlying fetcher (for testing)."""
        return self._fetcher

    @property
    def clients(self) -> ClientRegistry:
        return self._clients

    @property
    def notification_host(self) -> NotificationHost:
        return self._notification_host

    @property
    def background_sync(self) -> BackgroundSync:
        return self._sync
