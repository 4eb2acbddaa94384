"""
Tests for install/activate and cache versioning.
"""

import asyncio
import logging

import httpx
import pytest
from conftest import ORIGIN, make_gateway, run

from offline_gateway.config import Settings
from offline_gateway.entities import GatewayRequest, WorkerState
from offline_gateway.errors import CacheStorageError, InstallError, LifecycleError
from offline_gateway.repositories import HttpxFetcher, InMemoryCacheStorage, InMemoryClientRegistry
from offline_gateway.services import OfflineCacheGateway


def versioned(version: str) -> Settings:
    return Settings(origin_url=ORIGIN, static_resources=("/", "/stylesheet.css"), cache_version=version)


def test_install_precaches_static_resources(gateway, config, storage):
    async def scenario():
        count = await gateway.install()
        return count, await storage.entries(config.static_cache_name)

    count, entries = run(gateway, scenario)

    assert count == 3
    assert sorted(entries) == [
        ("GET", f"{ORIGIN}/"),
        ("GET", f"{ORIGIN}/manifest.json"),
        ("GET", f"{ORIGIN}/stylesheet.css"),
    ]
    assert gateway.state is WorkerState.INSTALLED
    assert gateway.skip_waiting is True


def test_install_keeps_absolute_resource_urls(gateway, origin, storage, config):
    font = "https://fonts.gstatic.com/s/inter/v12/inter.woff2"

    async def scenario():
        await gateway.install([font])
        return await storage.match(config.static_cache_name, GatewayRequest(url=font))

    assert run(gateway, scenario) is not None
    assert origin.count(font) == 1


def test_install_fails_when_a_resource_is_missing(gateway, origin, config, storage):
    origin.statuses[f"{ORIGIN}/manifest.json"] = 404

    async def scenario():
        with pytest.raises(InstallError) as exc_info:
            await gateway.install()
        return exc_info.value, await storage.entries(config.static_cache_name)

    error, entries = run(gateway, scenario)

    assert error.failed == [f"{ORIGIN}/manifest.json"]
    assert entries == []
    assert gateway.state is WorkerState.PARSED


def test_install_can_be_retried_after_network_failure(gateway, origin):
    async def scenario():
        origin.online = False
        with pytest.raises(InstallError):
            await gateway.install()
        origin.online = True
        return await gateway.install()

    assert run(gateway, scenario) == 3
    assert gateway.state is WorkerState.INSTALLED


def test_activate_requires_install(gateway):
    async def scenario():
        await gateway.activate()

    with pytest.raises(LifecycleError):
        run(gateway, scenario)


def test_activate_keeps_only_current_version(origin):
    storage = InMemoryCacheStorage()
    gateway = make_gateway(origin, versioned("v2"), storage)

    async def scenario():
        for name in (
            "language-of-wearing-v1-static",
            "language-of-wearing-static-v1",
            "language-of-wearing-dynamic-v1",
        ):
            await storage.open(name)
        await gateway.install()
        deleted = await gateway.activate()
        return deleted, await storage.keys()

    deleted, remaining = run(gateway, scenario)

    assert set(remaining) == {"language-of-wearing-static-v2", "language-of-wearing-dynamic-v2"}
    assert "language-of-wearing-static-v1" in deleted
    assert "language-of-wearing-dynamic-v1" in deleted


def test_activate_leaves_other_applications_alone(origin):
    storage = InMemoryCacheStorage()
    gateway = make_gateway(origin, versioned("v2"), storage)

    async def scenario():
        await storage.open("another-app-static-v1")
        await storage.open("language-of-wearing-static-v1")
        await gateway.install()
        await gateway.activate()
        return await storage.keys()

    remaining = run(gateway, scenario)

    assert "another-app-static-v1" in remaining
    assert "language-of-wearing-static-v1" not in remaining


def test_version_bump_invalidates_static_assets(origin):
    storage = InMemoryCacheStorage()
    request = GatewayRequest(url=f"{ORIGIN}/images/logo.png")

    async def first_deployment():
        gateway = make_gateway(origin, versioned("v1"), storage)
        await gateway.install()
        await gateway.activate()
        await gateway.fetch(request)
        await gateway.fetch(request)
        await gateway.close()

    async def second_deployment():
        gateway = make_gateway(origin, versioned("v2"), storage)
        await gateway.install()
        await gateway.activate()
        await gateway.fetch(request)
        await gateway.close()

    asyncio.run(first_deployment())
    assert origin.count(request.url) == 1
    asyncio.run(second_deployment())
    assert origin.count(request.url) == 2


class FlakyDeleteStorage(InMemoryCacheStorage):
    """Storage that cannot delete one store."""

    def __init__(self, stuck: str) -> None:
        super().__init__()
        self.stuck = stuck

    async def delete(self, name):
        if name == self.stuck:
            raise CacheStorageError("store is locked")
        return await super().delete(name)


def test_activate_skips_failed_deletions(origin, caplog):
    storage = FlakyDeleteStorage("language-of-wearing-static-v1")
    gateway = make_gateway(origin, versioned("v2"), storage)

    async def scenario():
        await storage.open("language-of-wearing-static-v1")
        await storage.open("language-of-wearing-dynamic-v1")
        await gateway.install()
        deleted = await gateway.activate()
        return deleted, await storage.keys()

    with caplog.at_level(logging.ERROR):
        deleted, remaining = run(gateway, scenario)

    assert deleted == ["language-of-wearing-dynamic-v1"]
    assert "language-of-wearing-static-v1" in remaining
    assert gateway.state is WorkerState.ACTIVATED
    assert "Failed to delete cache" in caplog.text


def test_activate_claims_clients(gateway):
    async def scenario():
        await gateway.install()
        await gateway.activate()

    run(gateway, scenario)

    assert gateway.clients.claimed is True
    assert gateway.is_controlling is True


def test_failed_reinstall_keeps_running_version(gateway, origin):
    async def scenario():
        await gateway.install()
        await gateway.activate()
        origin.online = False
        with pytest.raises(InstallError):
            await gateway.install()

    run(gateway, scenario)

    assert gateway.state is WorkerState.ACTIVATED
    assert gateway.is_controlling is True


def test_activate_requires_successful_install(gateway, origin):
    async def scenario():
        origin.online = False
        with pytest.raises(InstallError):
            await gateway.install()
        await gateway.activate()

    with pytest.raises(LifecycleError):
        run(gateway, scenario)

    assert gateway.skip_waiting is False


class GatedClientRegistry(InMemoryClientRegistry):
    """Client registry whose claim() blocks on a gate or fails."""

    def __init__(self) -> None:
        super().__init__()
        self.gate: asyncio.Event | None = None
        self.claiming: asyncio.Event | None = None
        self.error: Exception | None = None

    async def claim(self) -> None:
        if self.error is not None:
            raise self.error
        if self.gate is not None:
            self.claiming.set()
            await self.gate.wait()
        await super().claim()


def gated_gateway(origin, config):
    clients = GatedClientRegistry()
    gateway = OfflineCacheGateway.create(
        config=config,
        storage=InMemoryCacheStorage(),
        fetcher=HttpxFetcher.create(transport=httpx.MockTransport(origin)),
        clients=clients,
    )
    return gateway, clients


def test_reactivation_keeps_intercepting(origin, config):
    gateway, clients = gated_gateway(origin, config)
    request = GatewayRequest(url=f"{ORIGIN}/stylesheet.css")

    async def scenario():
        await gateway.install()
        await gateway.activate()

        clients.gate = asyncio.Event()
        clients.claiming = asyncio.Event()
        reactivation = asyncio.create_task(gateway.activate())
        await clients.claiming.wait()

        state = gateway.state
        response = await gateway.fetch(request)

        clients.gate.set()
        await reactivation
        return state, response

    state, response = run(gateway, scenario)

    assert state is WorkerState.ACTIVATED
    assert response is not None
    assert response.status == 200
    assert origin.count(request.url) == 1


def test_failed_activation_can_be_retried(origin, config):
    gateway, clients = gated_gateway(origin, config)

    async def scenario():
        await gateway.install()
        clients.error = RuntimeError("host refused claim")
        with pytest.raises(RuntimeError):
            await gateway.activate()
        state = gateway.state

        clients.error = None
        await gateway.activate()
        return state

    assert run(gateway, scenario) is WorkerState.INSTALLED
    assert gateway.state is WorkerState.ACTIVATED
    assert clients.claimed is True
