"""Domain entities for internal representation.

These are pure dataclasses (frozen) and enums used by services and
repositories. They are NOT used for API contracts - use DTOs from the dto
package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
"""

from .classification import StrategyKind, WorkerState
from .notification import Notification, NotificationAction
from .request import GatewayRequest
from .response import GatewayResponse

__all__ = [
    "GatewayRequest",
    "GatewayResponse",
    "Notification",
    "NotificationAction",
    "StrategyKind",
    "WorkerState",
]
