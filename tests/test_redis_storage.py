"""
Tests for the Redis cache storage.

Run against the Redis at REDIS_URL; skipped when it is not reachable.
"""

import asyncio
import uuid

import pytest
from redis.exceptions import RedisError

from offline_gateway.config import get_redis_client
from offline_gateway.entities import GatewayRequest, GatewayResponse
from offline_gateway.protocols import CacheStorage
from offline_gateway.repositories import RedisCacheStorage


def run_redis(scenario):
    """Run a scenario with a fresh namespace, skipping if Redis is down."""

    async def runner():
        client = get_redis_client()
        try:
            await client.ping()
        except (RedisError, OSError):
            await client.aclose()
            return "skip"

        storage = RedisCacheStorage(redis_client=client, namespace=f"test-{uuid.uuid4().hex}")
        try:
            return await scenario(storage)
        finally:
            for name in await storage.keys():
                await storage.delete(name)
            await storage.close()

    result = asyncio.run(runner())
    if result == "skip":
        pytest.skip("Redis is not running")
    return result


def test_satisfies_protocol():
    assert isinstance(RedisCacheStorage(redis_client=get_redis_client()), CacheStorage)


def test_round_trips_binary_bodies():
    request = GatewayRequest(url="http://survey.test/images/jacket.png")
    response = GatewayResponse(
        status=200,
        headers={"Content-Type": "image/png"},
        body=bytes(range(256)),
        url=request.url,
        reason="OK",
    )

    async def scenario(storage):
        await storage.put("static-v1", request, response)
        return await storage.match("static-v1", request), await storage.entries("static-v1")

    stored, entries = run_redis(scenario)

    assert stored == response
    assert entries == [("GET", request.url)]


def test_registry_and_delete():
    async def scenario(storage):
        await storage.open("static-v1")
        await storage.open("dynamic-v1")
        keys = await storage.keys()
        deleted = await storage.delete("static-v1")
        again = await storage.delete("static-v1")
        return keys, deleted, again, await storage.has("static-v1"), await storage.has("dynamic-v1")

    keys, deleted, again, has_static, has_dynamic = run_redis(scenario)

    assert set(keys) == {"static-v1", "dynamic-v1"}
    assert deleted is True
    assert again is False
    assert has_static is False
    assert has_dynamic is True


def test_match_any_in_order():
    request = GatewayRequest(url="http://survey.test/")

    async def scenario(storage):
        await storage.put("static-v1", request, GatewayResponse(status=200, body=b"static"))
        await storage.put("dynamic-v1", request, GatewayResponse(status=200, body=b"dynamic"))
        return await storage.match_any(request, ["dynamic-v1", "static-v1"])

    assert run_redis(scenario).body == b"dynamic"


def test_health_check():
    async def scenario(storage):
        return await storage.health_check()

    assert run_redis(scenario) is True
