"""
Tests for push notifications and notification clicks.
"""

import asyncio
import json

import pytest
from conftest import ORIGIN, run

from offline_gateway.entities import Notification
from offline_gateway.errors import PushPayloadError
from offline_gateway.repositories import InMemoryNotificationCenter, InMemoryWindowClient


def test_push_renders_payload(gateway):
    payload = json.dumps({"title": "New responses", "body": "12 new answers", "url": "/admin"})

    async def scenario():
        return await gateway.push(payload.encode())

    notification = run(gateway, scenario)

    assert notification.title == "New responses"
    assert notification.body == "12 new answers"
    assert notification.icon == "/icon-192x192.png"
    assert notification.badge == "/badge-72x72.png"
    assert notification.data == {"url": "/admin"}
    assert [a.action for a in notification.actions] == ["view", "dismiss"]
    assert notification.require_interaction is False
    assert notification.silent is False
    assert list(gateway.notification_host.notifications) == [notification]


def test_push_uses_defaults(gateway):
    async def scenario():
        return await gateway.push("{}")

    notification = run(gateway, scenario)

    assert notification.title == "Language of Wearing"
    assert notification.body == "New update from The Language of Wearing"
    assert notification.data["url"] == "/"


def test_push_without_payload_shows_nothing(gateway):
    async def scenario():
        return await gateway.push(None)

    assert run(gateway, scenario) is None
    assert len(gateway.notification_host.notifications) == 0


@pytest.mark.parametrize("payload", [b"not json", b"[1, 2]"])
def test_push_rejects_bad_payload(gateway, payload):
    async def scenario():
        return await gateway.push(payload)

    with pytest.raises(PushPayloadError):
        run(gateway, scenario)


def test_view_focuses_matching_window(gateway):
    other = InMemoryWindowClient(f"{ORIGIN}/")
    admin = InMemoryWindowClient(f"{ORIGIN}/admin")
    gateway.clients.clients.extend([other, admin])

    async def scenario():
        notification = await gateway.push(b'{"url": "/admin"}')
        client = await gateway.notification_click(notification, "view")
        return notification, client

    notification, client = run(gateway, scenario)

    assert client is admin
    assert admin.focused is True
    assert other.focused is False
    assert notification.closed is True
    assert len(gateway.clients.clients) == 2


def test_body_click_opens_root_when_no_window_matches(gateway):
    gateway.clients.clients.append(InMemoryWindowClient(f"{ORIGIN}/admin"))

    async def scenario():
        notification = await gateway.push(b"{}")
        return await gateway.notification_click(notification)

    client = run(gateway, scenario)

    assert client.url == f"{ORIGIN}/"
    assert client in gateway.clients.clients


def test_dismiss_only_closes(gateway):
    async def scenario():
        notification = await gateway.push(b'{"url": "/admin"}')
        client = await gateway.notification_click(notification, "dismiss")
        return notification, client

    notification, client = run(gateway, scenario)

    assert client is None
    assert notification.closed is True
    assert gateway.clients.clients == []


def test_click_when_host_cannot_open_windows(gateway):
    gateway.clients.can_open_windows = False

    async def scenario():
        notification = await gateway.push(b"{}")
        return await gateway.notification_click(notification, "view")

    assert run(gateway, scenario) is None


def test_notification_center_keeps_most_recent():
    center = InMemoryNotificationCenter(max_notifications=2)

    async def scenario():
        for title in ("first", "second", "third"):
            await center.show_notification(Notification(title=title))

    asyncio.run(scenario())

    assert [n.title for n in center.get_notifications()] == ["second", "third"]
