"""Gateway event handler protocol.

One method per signal the host runtime delivers. A host adapter binds these
to its own event registration (see offline_gateway.handlers).
"""

from typing import Protocol, runtime_checkable

from offline_gateway.entities import GatewayRequest, GatewayResponse, Notification

from .clients import WindowClient


@runtime_checkable
class GatewayEventHandler(Protocol):
    """Protocol implemented by the gateway for its host."""

    async def install(self, resources: list[str] | None = None) -> int:
        """Handle the install signal; returns the number of resources cached."""
        ...

    async def activate(self) -> list[str]:
        """Handle the activate signal."""
        ...

    async def fetch(self, request: GatewayRequest) -> GatewayResponse | None:
        """Handle an intercepted request; None leaves it to the host."""
        ...

    async def sync(self, tag: str) -> bool:
        """Handle a background sync signal."""
        ...

    async def push(self, payload: bytes | str | None) -> Notification | None:
        """Handle a push message."""
        ...

    async def notification_click(
        self,
        notification: Notification,
        action: str = "",
    ) -> WindowClient | None:
        """Handle a click on a notification or one of its actions."""
        ...
