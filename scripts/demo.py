#!/usr/bin/env python3
"""
Demo script for the offline cache gateway.

Runs the gateway against a simulated origin (httpx.MockTransport) and
switches the network off to show what each strategy does offline.
"""

import asyncio

import httpx

from offline_gateway import GatewayRequest, NetworkError, Settings
from offline_gateway.repositories import HttpxFetcher, InMemoryCacheStorage
from offline_gateway.services import OfflineCacheGateway

ORIGIN = "http://survey.local"


class SimulatedOrigin:
    """A tiny origin server that can be taken offline."""

    def __init__(self) -> None:
        self.online = True
        self.hits = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if not self.online:
            raise httpx.ConnectError("network is down", request=request)
        self.hits += 1
        path = request.url.path
        if path.endswith(".json"):
            return httpx.Response(200, json={"responses": self.hits})
        if path.endswith(".css"):
            return httpx.Response(200, text="body { color: #374151; }", headers={"Content-Type": "text/css"})
        return httpx.Response(200, text=f"<h1>{path} #{self.hits}</h1>", headers={"Content-Type": "text/html"})


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def show(gateway: OfflineCacheGateway, request: GatewayRequest) -> None:
    strategy = gateway.classify(request.url).value
    try:
        response = await gateway.fetch(request)
    except NetworkError as e:
        print(f"  {request.url:<45} [{strategy}] ✗ {e}")
        return
    print(f"  {request.url:<45} [{strategy}] ✓ {response.status} {response.text()[:40]!r}")


async def demo() -> None:
    origin = SimulatedOrigin()
    config = Settings(origin_url=ORIGIN, static_resources=("/", "/stylesheet.css", "/manifest.json"))
    gateway = OfflineCacheGateway.create(
        config=config,
        storage=InMemoryCacheStorage(),
        fetcher=HttpxFetcher.create(transport=httpx.MockTransport(origin)),
    )

    print_section("Lifecycle")
    count = await gateway.install()
    print(f"  Pre-cached {count} resources into {config.static_cache_name}")
    deleted = await gateway.activate()
    print(f"  Activated, deleted old caches: {deleted or 'none'}")

    requests = [
        GatewayRequest(url=f"{ORIGIN}/", destination="document"),
        GatewayRequest(url=f"{ORIGIN}/stylesheet.css"),
        GatewayRequest(url=f"{ORIGIN}/api/stats.json"),
        GatewayRequest(url=f"{ORIGIN}/admin", destination="document"),
        GatewayRequest(url=f"{ORIGIN}/logo.png"),
    ]

    print_section("Online")
    for request in requests:
        await show(gateway, request)
    await gateway.drain()

    print_section("Offline")
    origin.online = False
    for request in requests:
        await show(gateway, request)
    await show(gateway, GatewayRequest(url=f"{ORIGIN}/api/never-seen", mode="navigate"))
    await gateway.drain()

    print_section("Caches")
    for name in await gateway.storage.keys():
        print(f"  {name}")
        for method, url in await gateway.storage.entries(name):
            print(f"    {method} {url}")

    await gateway.close()


def main() -> None:
    """Run the demo."""
    print("\n🚀 Offline Cache Gateway Demo")
    asyncio.run(demo())
    print("\n✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
