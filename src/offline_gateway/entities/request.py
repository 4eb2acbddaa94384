"""Intercepted request domain entity."""

from dataclasses import dataclass, field
from urllib.parse import urlparse


@dataclass(frozen=True)
class GatewayRequest:
    """A request handed to the gateway by its host.

    Attributes:
        url: Absolute request URL
        method: HTTP method (upper case)
        headers: Request headers; never part of cache matching
        body: Raw request body, if any
        destination: Fetch destination ("document", "image", "style", ...)
        mode: Fetch mode ("navigate", "cors", "no-cors", ...)
    """

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    destination: str = ""
    mode: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    @property
    def scheme(self) -> str:
        """URL scheme in lower case (e.g. "https", "chrome-extension")."""
        return urlparse(self.url).scheme.lower()

    @property
    def is_navigation(self) -> bool:
        """True for top-level document loads."""
        return self.destination == "document" or self.mode == "navigate"

    @property
    def cache_key(self) -> tuple[str, str]:
        """Key used by cache stores: method and URL, headers ignored."""
        return (self.method, self.url)
