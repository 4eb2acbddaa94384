"""
Shared fixtures: a fake origin behind httpx.MockTransport and a gateway wired to it.
"""

import asyncio

import httpx
import pytest

from offline_gateway.config import Settings
from offline_gateway.repositories import HttpxFetcher, InMemoryCacheStorage
from offline_gateway.services import OfflineCacheGateway

ORIGIN = "http://survey.test"


class FakeOrigin:
    """Origin server stand-in that counts requests and can go offline."""

    def __init__(self) -> None:
        self.online = True
        self.calls: list[str] = []
        self.statuses: dict[str, int] = {}
        self.gate: asyncio.Event | None = None
        self.served = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if not self.online:
            raise httpx.ConnectError("network is unreachable", request=request)
        self.served += 1
        return httpx.Response(
            self.statuses.get(url, 200),
            content=f"{request.method} {url} #{self.served}".encode(),
            headers={"Content-Type": "text/plain"},
        )

    def count(self, url: str) -> int:
        return self.calls.count(url)


def make_gateway(origin: FakeOrigin, config: Settings, storage=None) -> OfflineCacheGateway:
    return OfflineCacheGateway.create(
        config=config,
        storage=storage if storage is not None else InMemoryCacheStorage(),
        fetcher=HttpxFetcher.create(transport=httpx.MockTransport(origin)),
    )


def run(gateway: OfflineCacheGateway, scenario):
    """Run an async scenario and close the gateway afterwards."""

    async def runner():
        try:
            return await scenario()
        finally:
            await gateway.close()

    return asyncio.run(runner())


@pytest.fixture
def origin():
    """Create a fake origin."""
    return FakeOrigin()


@pytest.fixture
def config():
    """Settings pointing at the fake origin."""
    return Settings(
        origin_url=ORIGIN,
        static_resources=("/", "/stylesheet.css", "/manifest.json"),
        cache_version="v1",
    )


@pytest.fixture
def storage():
    return InMemoryCacheStorage()


@pytest.fixture
def gateway(origin, config, storage):
    """Create a gateway that is not installed yet."""
    return make_gateway(origin, config, storage)
