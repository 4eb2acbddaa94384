"""Redis implementation of CacheStorage.

Layout:
    {namespace}:stores         sorted set of store names, scored by creation time
    {namespace}:store:{name}   hash of "METHOD url" -> JSON encoded response

Bodies are base64 encoded inside the JSON document so they round-trip
byte for byte.
"""

import base64
import json
import logging
import time

import redis.asyncio as redis
from redis.exceptions import RedisError

from offline_gateway.config import Settings, get_redis_client, settings
from offline_gateway.entities import GatewayRequest, GatewayResponse
from offline_gateway.errors import CacheStorageError

logger = logging.getLogger(__name__)


def _field(request: GatewayRequest) -> str:
    method, url = request.cache_key
    return f"{method} {url}"


def _encode(response: GatewayResponse) -> str:
    return json.dumps(
        {
            "status": response.status,
            "reason": response.reason,
            "url": response.url,
            "headers": response.headers,
            "body": base64.b64encode(response.body).decode("ascii"),
        }
    )


def _decode(raw: bytes | str) -> GatewayResponse:
    data = json.loads(raw)
    return GatewayResponse(
        status=int(data["status"]),
        headers=dict(data.get("headers") or {}),
        body=base64.b64decode(data.get("body") or ""),
        url=data.get("url", ""),
        reason=data.get("reason", ""),
    )


class RedisCacheStorage:
    """Redis-backed cache stores.

    This class satisfies the CacheStorage protocol through structural
    typing - no explicit inheritance needed. HSET is atomic per field, which
    gives last-write-wins semantics for concurrent writes to the same key.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str = "offline-gateway",
    ) -> None:
        """Initialize the Redis cache storage.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            namespace: Prefix for every Redis key written by this storage.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace

    @classmethod
    def create(
        cls,
        config: Settings | None = None,
        namespace: str = "offline-gateway",
    ) -> "RedisCacheStorage":
        """Factory method to create RedisCacheStorage from settings.

        Args:
            config: Settings holding the Redis URL. If None, uses global settings.
            namespace: Key prefix.

        Returns:
            Configured RedisCacheStorage
        """
        return cls(redis_client=get_redis_client(config or settings), namespace=namespace)

    @property
    def _registry_key(self) -> str:
        return f"{self._namespace}:stores"

    def _store_key(self, name: str) -> str:
        return f"{self._namespace}:store:{name}"

    async def open(self, name: str) -> None:
        try:
            await self._client.zadd(self._registry_key, {name: time.time()}, nx=True)
        except RedisError as e:
            raise CacheStorageError(f"Failed to open store {name}: {e}") from e

    async def has(self, name: str) -> bool:
        try:
            return await self._client.zscore(self._registry_key, name) is not None
        except RedisError as e:
            raise CacheStorageError(f"Failed to check store {name}: {e}") from e

    async def keys(self) -> list[str]:
        try:
            names = await self._client.zrange(self._registry_key, 0, -1)
        except RedisError as e:
            raise CacheStorageError(f"Failed to list stores: {e}") from e
        return [n.decode() if isinstance(n, bytes) else n for n in names]

    async def delete(self, name: str) -> bool:
        try:
            pipe = self._client.pipeline()
            pipe.zrem(self._registry_key, name)
            pipe.delete(self._store_key(name))
            removed, _ = await pipe.execute()
        except RedisError as e:
            raise CacheStorageError(f"Failed to delete store {name}: {e}") from e
        return bool(removed)

    async def match(self, name: str, request: GatewayRequest) -> GatewayResponse | None:
        try:
            raw = await self._client.hget(self._store_key(name), _field(request))
        except RedisError as e:
            raise CacheStorageError(f"Failed to read from store {name}: {e}") from e
        if raw is None:
            return None
        try:
            return _decode(raw)
        except (ValueError, KeyError) as e:
            logger.warning("Discarding unreadable entry %s in %s: %s", _field(request), name, e)
            return None

    async def match_any(
        self,
        request: GatewayRequest,
        names: list[str] | None = None,
    ) -> GatewayResponse | None:
        for name in names if names is not None else await self.keys():
            response = await self.match(name, request)
            if response is not None:
                return response
        return None

    async def put(self, name: str, request: GatewayRequest, response: GatewayResponse) -> None:
        try:
            pipe = self._client.pipeline()
            pipe.zadd(self._registry_key, {name: time.time()}, nx=True)
            pipe.hset(self._store_key(name), _field(request), _encode(response))
            await pipe.execute()
        except RedisError as e:
            raise CacheStorageError(f"Failed to write to store {name}: {e}") from e

    async def entries(self, name: str) -> list[tuple[str, str]]:
        try:
            fields = await self._client.hkeys(self._store_key(name))
        except RedisError as e:
            raise CacheStorageError(f"Failed to list store {name}: {e}") from e
        result = []
        for raw in fields:
            text = raw.decode() if isinstance(raw, bytes) else raw
            method, _, url = text.partition(" ")
            result.append((method, url))
        return result

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
