"""Response DTOs for control endpoints."""

from pydantic import BaseModel, Field


class InstallResponse(BaseModel):
    """Response DTO for the install step."""

    success: bool = Field(..., description="Whether pre-caching succeeded")
    cached_count: int = Field(0, description="Number of resources pre-cached", ge=0)
    static_cache: str = Field(..., description="Name of the static store")
    message: str = Field(..., description="Human-readable status message")


class ActivateResponse(BaseModel):
    """Response DTO for the activate step."""

    success: bool = Field(..., description="Whether the gateway is now controlling clients")
    deleted: list[str] = Field(default_factory=list, description="Stale stores that were deleted")
    static_cache: str = Field(..., description="Current static store")
    dynamic_cache: str = Field(..., description="Current dynamic store")


class SyncResponse(BaseModel):
    """Response DTO for a background sync signal."""

    tag: str = Field(..., description="The sync tag")
    handled: bool = Field(..., description="Whether a handler ran for the tag")


class NotificationItem(BaseModel):
    """A notification shown by the gateway."""

    index: int = Field(..., description="Position in the notification list", ge=0)
    title: str
    body: str
    icon: str | None = None
    badge: str | None = None
    url: str = Field("/", description="Click target")
    actions: list[str] = Field(default_factory=list, description="Action identifiers")
    closed: bool = False


class NotificationClickResponse(BaseModel):
    """Response DTO for a notification click."""

    action: str = Field(..., description="The clicked action")
    client_url: str | None = Field(None, description="URL of the focused or opened window")
    focused: bool = Field(False, description="Whether a window was brought into view")


class CacheStoreItem(BaseModel):
    """A cache store and its keys."""

    name: str
    current: bool = Field(..., description="Whether the store belongs to the running version")
    entry_count: int = Field(..., ge=0)
    entries: list[str] = Field(default_factory=list, description="'METHOD url' keys")


class CachesResponse(BaseModel):
    """Response DTO listing cache stores."""

    caches: list[CacheStoreItem] = Field(default_factory=list)


class ClassifyResponse(BaseModel):
    """Response DTO for URL classification."""

    url: str
    strategy: str | None = Field(None, description="Strategy, or null when not intercepted")
    intercepted: bool


class StatusResponse(BaseModel):
    """Response DTO describing the running gateway."""

    app_name: str
    version: str
    state: str
    controlling: bool
    static_cache: str
    dynamic_cache: str
    caches: list[str]
    pending_background_tasks: int = Field(0, ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    storage_healthy: bool = Field(..., description="Whether the cache storage is reachable")
    controlling: bool = Field(..., description="Whether the gateway is active")
