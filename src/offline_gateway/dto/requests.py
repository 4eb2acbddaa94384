"""Request DTOs for control endpoints."""

from pydantic import BaseModel, Field


class InstallRequest(BaseModel):
    """Request DTO for (re)running the install step."""

    resources: list[str] | None = Field(
        None,
        description="URLs to pre-cache (defaults to the configured static resources)",
    )


class SyncRequest(BaseModel):
    """Request DTO for firing a background sync signal."""

    tag: str = Field(..., description="Sync tag", min_length=1)


class PushRequest(BaseModel):
    """Request DTO carrying a push message payload.

    The handler serializes it back to JSON and hands the raw bytes to the
    gateway, as a push service would.
    """

    title: str | None = Field(None, description="Notification title")
    body: str | None = Field(None, description="Notification text")
    url: str | None = Field(None, description="URL opened when the notification is clicked")


class NotificationClickRequest(BaseModel):
    """Request DTO for clicking a shown notification."""

    action: str = Field("", description="Action button clicked; empty for the notification body")
