"""Data Transfer Objects for API contracts.

These Pydantic models define the control API of the gateway host.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import InstallRequest, NotificationClickRequest, PushRequest, SyncRequest
from .responses import (
    ActivateResponse,
    CacheStoreItem,
    CachesResponse,
    ClassifyResponse,
    HealthCheckResponse,
    InstallResponse,
    NotificationClickResponse,
    NotificationItem,
    StatusResponse,
    SyncResponse,
)

__all__ = [
    "InstallRequest",
    "SyncRequest",
    "PushRequest",
    "NotificationClickRequest",
    "ActivateResponse",
    "CacheStoreItem",
    "CachesResponse",
    "ClassifyResponse",
    "HealthCheckResponse",
    "InstallResponse",
    "NotificationClickResponse",
    "NotificationItem",
    "StatusResponse",
    "SyncResponse",
]
