"""In-process window clients and notification center.

Used by the HTTP host, which has no browser windows of its own, and by
tests. Windows opened and notifications shown are recorded so they can be
inspected through the control API.
"""

import logging
from collections import deque

from offline_gateway.entities import Notification

logger = logging.getLogger(__name__)


class InMemoryWindowClient:
    """A recorded browsing context."""

    def __init__(self, url: str, client_type: str = "window") -> None:
        self._url = url
        self.client_type = client_type
        self.focused = False

    @property
    def url(self) -> str:
        return self._url

    async def focus(self) -> "InMemoryWindowClient":
        self.focused = True
        logger.debug("Focused client %s", self._url)
        return self

    def __repr__(self) -> str:
        return f"InMemoryWindowClient(url={self._url!r}, focused={self.focused})"


class InMemoryClientRegistry:
    """ClientRegistry implementation backed by a list.

    Args:
        clients: Initially open clients
        can_open_windows: Whether open_window is supported
    """

    def __init__(
        self,
        clients: list[InMemoryWindowClient] | None = None,
        can_open_windows: bool = True,
    ) -> None:
        self.clients: list[InMemoryWindowClient] = list(clients or [])
        self.can_open_windows = can_open_windows
        self.claimed = False

    async def claim(self) -> None:
        self.claimed = True
        logger.debug("Claimed %d clients", len(self.clients))

    async def match_all(self, client_type: str = "window") -> list[InMemoryWindowClient]:
        if client_type == "all":
            return list(self.clients)
        return [c for c in self.clients if c.client_type == client_type]

    async def open_window(self, url: str) -> InMemoryWindowClient | None:
        if not self.can_open_windows:
            return None
        client = InMemoryWindowClient(url)
        client.focused = True
        self.clients.append(client)
        logger.debug("Opened window %s", url)
        return client


class InMemoryNotificationCenter:
    """NotificationHost implementation that records what was shown.

    Args:
        max_notifications: How many notifications are kept; the oldest are
            dropped first
    """

    def __init__(self, max_notifications: int = 100) -> None:
        self.notifications: deque[Notification] = deque(maxlen=max_notifications)

    async def show_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)
        logger.info("Notification shown: %s", notification.title)

    def get_notifications(self, include_closed: bool = False) -> list[Notification]:
        """Return shown notifications, open ones only by default."""
        if include_closed:
            return list(self.notifications)
        return [n for n in self.notifications if not n.closed]
