"""Push notification rendering and click routing."""

import json
import logging
from typing import Any
from urllib.parse import urljoin

from offline_gateway.entities import Notification, NotificationAction
from offline_gateway.errors import PushPayloadError
from offline_gateway.protocols import ClientRegistry, NotificationHost, WindowClient

logger = logging.getLogger(__name__)

VIEW_ACTION = "view"
DISMISS_ACTION = "dismiss"


class NotificationService:
    """Turn push payloads into notifications and route clicks to windows.

    Args:
        host: Where notifications are rendered
        clients: Client registry used to focus or open windows
        origin_url: Base URL that relative click targets resolve against
        app_name: Used in the default notification body
        default_title: Title when the payload has none
        icon: Notification icon URL
        badge: Notification badge URL
    """

    def __init__(
        self,
        host: NotificationHost,
        clients: ClientRegistry,
        origin_url: str,
        app_name: str,
        default_title: str,
        icon: str,
        badge: str,
    ) -> None:
        self._host = host
        self._clients = clients
        self._origin_url = origin_url.rstrip("/") + "/"
        self._app_name = app_name
        self._default_title = default_title
        self._icon = icon
        self._badge = badge

    def build_notification(self, data: dict[str, Any]) -> Notification:
        """Build a notification from a decoded push payload.

        Args:
            data: Payload with optional "title", "body" and "url"

        Returns:
            The notification to show
        """
        return Notification(
            title=data.get("title") or self._default_title,
            body=data.get("body") or f"New update from {self._app_name}",
            icon=self._icon,
            badge=self._badge,
            data={"url": data.get("url") or "/"},
            actions=[
                NotificationAction(action=VIEW_ACTION, title="View", icon="/action-view.png"),
                NotificationAction(action=DISMISS_ACTION, title="Dismiss", icon="/action-dismiss.png"),
            ],
            require_interaction=False,
            silent=False,
        )

    async def push(self, payload: bytes | str | None) -> Notification | None:
        """Render the notification carried by a push message.

        Args:
            payload: Raw JSON payload, or None for a push without data

        Returns:
            The shown notification, or None when there was no payload

        Raises:
            PushPayloadError: If the payload is not a JSON object
        """
        if payload is None:
            logger.debug("Push without payload ignored")
            return None

        try:
            data = json.loads(payload)
        except ValueError as e:
            raise PushPayloadError(f"Push payload is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise PushPayloadError("Push payload must be a JSON object")

        notification = self.build_notification(data)
        await self._host.show_notification(notification)
        return notification

    async def notification_click(
        self,
        notification: Notification,
        action: str = "",
    ) -> WindowClient | None:
        """Close the notification and bring its target into view.

        The "view" action, or a click on the notification body, focuses
        the first window already showing the target URL, or opens one.

        Returns:
            The focused or opened client, None for other actions
        """
        notification.close()

        if action and action != VIEW_ACTION:
            logger.debug("Notification action %r needs no window", action)
            return None

        url = urljoin(self._origin_url, notification.data.get("url") or "/")

        for client in await self._clients.match_all("window"):
            if client.url == url:
                return await client.focus()

        client = await self._clients.open_window(url)
        if client is None:
            logger.warning("Host cannot open windows; dropped click for %s", url)
        return client
