"""Response domain entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GatewayResponse:
    """A fully buffered HTTP response.

    Immutable, so the copy kept in a cache store and the one returned to the
    caller are the same bytes.

    Attributes:
        status: HTTP status code
        headers: Response headers
        body: Response body
        url: URL the response was fetched from ("" when synthesized)
        reason: Status text
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    url: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status <= 299

    @property
    def content_type(self) -> str:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return ""

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")
