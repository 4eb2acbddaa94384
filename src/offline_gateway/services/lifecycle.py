"""Cache lifecycle management.

Install pre-caches the application shell into the current static store;
activate prunes every store of an older version and claims the clients.
Bumping the cache version is the only way previously stored static assets
are invalidated.
"""

import asyncio
import logging
from urllib.parse import urljoin

from offline_gateway.config import Settings
from offline_gateway.entities import GatewayRequest, WorkerState
from offline_gateway.errors import CacheStorageError, InstallError, LifecycleError, NetworkError
from offline_gateway.protocols import CacheStorage, ClientRegistry, Fetcher

logger = logging.getLogger(__name__)


class CacheLifecycleManager:
    """Bring the current version's stores into existence and drop old ones.

    Args:
        storage: The cache store registry
        fetcher: Network access for pre-caching
        clients: Client registry to claim on activation
        config: Settings holding version, prefix, origin and resources
    """

    def __init__(
        self,
        storage: CacheStorage,
        fetcher: Fetcher,
        clients: ClientRegistry,
        config: Settings,
    ) -> None:
        self._storage = storage
        self._fetcher = fetcher
        self._clients = clients
        self._config = config
        self._state = WorkerState.PARSED
        self._skip_waiting = False

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def skip_waiting(self) -> bool:
        """True once an install succeeded; activate() requires it."""
        return self._skip_waiting

    @property
    def static_cache(self) -> str:
        return self._config.static_cache_name

    @property
    def dynamic_cache(self) -> str:
        return self._config.dynamic_cache_name

    def resolve(self, url: str) -> str:
        """Resolve a resource URL against the origin."""
        return urljoin(self._config.origin_url.rstrip("/") + "/", url)

    def is_own_stale_cache(self, name: str) -> bool:
        """True for stores of this application that belong to another version."""
        return name.startswith(self._config.cache_prefix) and name not in (
            self.static_cache,
            self.dynamic_cache,
        )

    async def install(self, resources: list[str] | None = None) -> int:
        """Pre-cache the static resources into the current static store.

        All resources are fetched before any is stored, so a failed install
        never leaves a partially confirmed store behind.

        Args:
            resources: URLs to pre-cache. Defaults to the configured list.

        Returns:
            Number of resources cached

        Raises:
            InstallError: If any resource could not be fetched or stored
        """
        logger.info("Installing %s", self.static_cache)
        # A running version keeps controlling while it re-installs.
        previous = self._state
        if previous is not WorkerState.ACTIVATED:
            self._state = WorkerState.INSTALLING

        if resources is None:
            resources = list(self._config.static_resources)
        urls = [self.resolve(url) for url in resources]
        requests = [GatewayRequest(url=url) for url in urls]

        try:
            await self._storage.open(self.static_cache)
            logger.info("Caching %d static resources", len(requests))
            results = await asyncio.gather(
                *(self._fetcher.fetch(request) for request in requests),
                return_exceptions=True,
            )

            failed = []
            for request, result in zip(requests, results):
                if isinstance(result, NetworkError):
                    failed.append(request.url)
                elif isinstance(result, BaseException):
                    raise result
                elif not result.ok:
                    logger.warning("Pre-cache of %s returned HTTP %d", request.url, result.status)
                    failed.append(request.url)

            if failed:
                raise InstallError(
                    f"Failed to pre-cache {len(failed)} of {len(requests)} resources",
                    failed=failed,
                )

            for request, response in zip(requests, results):
                await self._storage.put(self.static_cache, request, response)

        except (InstallError, CacheStorageError) as e:
            self._state = previous
            logger.error("Installation failed: %s", e)
            if isinstance(e, InstallError):
                raise
            raise InstallError(f"Failed to populate {self.static_cache}: {e}") from e

        self._skip_waiting = True
        if previous is not WorkerState.ACTIVATED:
            self._state = WorkerState.INSTALLED
        logger.info("Installation complete")
        return len(requests)

    async def activate(self) -> list[str]:
        """Delete stale stores of this application and claim the clients.

        Deletion is best effort: a store that cannot be deleted is logged
        and skipped. An already active gateway keeps controlling while it
        re-activates.

        Returns:
            Names of the deleted stores

        Raises:
            LifecycleError: If no install has completed yet
        """
        if not self._skip_waiting or self._state is WorkerState.INSTALLING:
            raise LifecycleError(f"Cannot activate from state {self._state.value!r}; install first")

        logger.info("Activating %s", self._config.cache_version)
        previous = self._state
        if previous is not WorkerState.ACTIVATED:
            self._state = WorkerState.ACTIVATING

        try:
            deleted = await self._prune()

            try:
                await self._storage.open(self.dynamic_cache)
            except CacheStorageError as e:
                logger.error("Could not open %s: %s", self.dynamic_cache, e)

            await self._clients.claim()
            self._state = WorkerState.ACTIVATED
        finally:
            if self._state is WorkerState.ACTIVATING:
                logger.error("Activation of %s did not complete", self._config.cache_version)
                self._state = previous

        logger.info("Activation complete")
        return deleted

    async def _prune(self) -> list[str]:
        try:
            names = await self._storage.keys()
        except CacheStorageError as e:
            logger.error("Could not list caches, skipping cleanup: %s", e)
            return []

        stale = [name for name in names if self.is_own_stale_cache(name)]
        outcomes = await asyncio.gather(*(self._delete(name) for name in stale))
        return [name for name, ok in zip(stale, outcomes) if ok]

    async def _delete(self, name: str) -> bool:
        logger.info("Deleting old cache: %s", name)
        try:
            return await self._storage.delete(name)
        except CacheStorageError as e:
            logger.error("Failed to delete cache %s: %s", name, e)
            return False
