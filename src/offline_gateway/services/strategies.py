"""The three fetch strategies.

Each strategy answers one intercepted request. Steps within a request run
in order; nothing orders different requests, and concurrent writes to one
cache key are last-write-wins.
"""

import asyncio
import logging

from offline_gateway.entities import GatewayRequest, GatewayResponse, StrategyKind
from offline_gateway.errors import CacheStorageError, NetworkError
from offline_gateway.protocols import CacheStorage, Fetcher

from .background import BackgroundTasks
from .offline_page import offline_response

logger = logging.getLogger(__name__)

# Only complete GET responses can be replayed from a store.
CACHEABLE_METHODS = frozenset({"GET"})


class CachingStrategy:
    """Shared plumbing for the strategies.

    Args:
        storage: The cache store registry
        fetcher: Network access
        static_cache: Name of the current static store
        dynamic_cache: Name of the current dynamic store
    """

    kind: StrategyKind

    def __init__(
        self,
        storage: CacheStorage,
        fetcher: Fetcher,
        static_cache: str,
        dynamic_cache: str,
    ) -> None:
        self._storage = storage
        self._fetcher = fetcher
        self._static_cache = static_cache
        self._dynamic_cache = dynamic_cache

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        raise NotImplementedError

    @property
    def lookup_order(self) -> list[str]:
        return [self._dynamic_cache, self._static_cache]

    async def _lookup(self, request: GatewayRequest) -> GatewayResponse | None:
        try:
            return await self._storage.match_any(request, self.lookup_order)
        except CacheStorageError as e:
            logger.warning("Cache lookup failed for %s: %s", request.url, e)
            return None

    async def _store(self, name: str, request: GatewayRequest, response: GatewayResponse) -> bool:
        """Put a copy of a successful GET response into a store.

        Returns:
            True if the response was stored
        """
        if request.method not in CACHEABLE_METHODS or not response.ok or response.status == 206:
            return False
        try:
            await self._storage.put(name, request, response)
        except CacheStorageError as e:
            logger.warning("Could not cache %s in %s: %s", request.url, name, e)
            return False
        return True


class NetworkFirstStrategy(CachingStrategy):
    """Prefer a live response; fall back to the cache, then the offline page."""

    kind = StrategyKind.NETWORK_FIRST

    def __init__(self, *args, app_name: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._app_name = app_name

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        try:
            response = await self._fetcher.fetch(request)
        except NetworkError:
            logger.info("Network request failed, trying cache: %s", request.url)

            cached = await self._lookup(request)
            if cached is not None:
                return cached

            if request.is_navigation:
                logger.info("Serving offline page for %s", request.url)
                return offline_response(self._app_name)

            raise

        await self._store(self._dynamic_cache, request, response)
        return response


class CacheFirstStrategy(CachingStrategy):
    """Serve stored copies of long-lived assets; fetch only on a miss."""

    kind = StrategyKind.CACHE_FIRST

    @property
    def lookup_order(self) -> list[str]:
        return [self._static_cache, self._dynamic_cache]

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        cached = await self._lookup(request)
        if cached is not None:
            return cached

        try:
            response = await self._fetcher.fetch(request)
        except NetworkError:
            logger.info("Both cache and network failed for: %s", request.url)
            raise

        await self._store(self._static_cache, request, response)
        return response


class StaleWhileRevalidateStrategy(CachingStrategy):
    """Answer from the cache at once and refresh it in the background.

    The network fetch starts before the cache lookup completes and runs as a
    detached task: it is not cancelled when the caller goes away, and its
    failures reach the caller only when there was no cached copy to return.
    """

    kind = StrategyKind.STALE_WHILE_REVALIDATE

    def __init__(self, *args, background: BackgroundTasks, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._background = background

    async def handle(self, request: GatewayRequest) -> GatewayResponse:
        revalidation = self._background.spawn(
            self._revalidate(request),
            name=f"revalidate {request.url}",
        )

        cached = await self._lookup(request)
        if cached is not None:
            return cached

        return await asyncio.shield(revalidation)

    async def _revalidate(self, request: GatewayRequest) -> GatewayResponse:
        response = await self._fetcher.fetch(request)
        if await self._store(self._dynamic_cache, request, response):
            logger.debug("Revalidated %s", request.url)
        return response
