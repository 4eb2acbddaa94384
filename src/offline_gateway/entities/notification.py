"""Notification domain entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NotificationAction:
    """A button rendered on a notification."""

    action: str
    title: str
    icon: str | None = None


@dataclass
class Notification:
    """A notification shown through the host's notification API.

    Mutable only in ``closed``, which flips when the user interacts with it.

    Attributes:
        title: Notification title
        body: Notification text
        icon: Icon URL
        badge: Badge URL
        data: Arbitrary payload; ``data["url"]`` is the click target
        actions: Action buttons
        require_interaction: Keep visible until the user acts
        silent: Suppress sound/vibration
        tag: Optional grouping tag
    """

    title: str
    body: str = ""
    icon: str | None = None
    badge: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    actions: list[NotificationAction] = field(default_factory=list)
    require_interaction: bool = False
    silent: bool = False
    tag: str | None = None
    closed: bool = False

    def close(self) -> None:
        self.closed = True
