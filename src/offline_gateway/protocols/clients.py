"""Client window and notification protocols.

These stand in for the host runtime's window-management and notification
APIs, which the gateway drives but never implements.
"""

from typing import Protocol, runtime_checkable

from offline_gateway.entities import Notification


@runtime_checkable
class WindowClient(Protocol):
    """A browsing context controlled (or controllable) by the gateway."""

    @property
    def url(self) -> str:
        """Current URL of the window."""
        ...

    async def focus(self) -> "WindowClient":
        """Bring the window to the foreground."""
        ...


@runtime_checkable
class ClientRegistry(Protocol):
    """Protocol for the set of clients the gateway can see."""

    async def claim(self) -> None:
        """Take control of every open client without a reload."""
        ...

    async def match_all(self, client_type: str = "window") -> list[WindowClient]:
        """List open clients of a type.

        Args:
            client_type: Client type filter ("window", "worker", "all")

        Returns:
            Matching clients
        """
        ...

    async def open_window(self, url: str) -> WindowClient | None:
        """Open a new window.

        Args:
            url: URL to open

        Returns:
            The new client, or None if the host cannot open windows
        """
        ...


@runtime_checkable
class NotificationHost(Protocol):
    """Protocol for rendering notifications."""

    async def show_notification(self, notification: Notification) -> None:
        """Display a notification.

        Args:
            notification: The notification to render
        """
        ...
