"""Exception taxonomy for the offline cache gateway."""


class GatewayError(Exception):
    """Base class for every error raised by the gateway."""


class InstallError(GatewayError):
    """Pre-caching the static resources failed; the install must be retried."""

    def __init__(self, message: str, failed: list[str] | None = None) -> None:
        super().__init__(message)
        self.failed = failed or []


class NetworkError(GatewayError):
    """A network fetch was rejected before a response was received."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class CacheStorageError(GatewayError):
    """The cache storage backend could not complete an operation."""


class LifecycleError(GatewayError):
    """A lifecycle signal arrived in a state that cannot accept it."""


class PushPayloadError(GatewayError):
    """A push message carried a payload that is not valid JSON."""
