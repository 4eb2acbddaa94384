"""Cache storage protocol.

Defines the registry of named cache stores. Each store maps a request
(method + URL, headers ignored) to a buffered response.

Implementations can include:
- In-process dictionaries (default)
- Redis hashes, one hash per store
- Any other key/value backend with atomic single-key writes
"""

from typing import Protocol, runtime_checkable

from offline_gateway.entities import GatewayRequest, GatewayResponse


@runtime_checkable
class CacheStorage(Protocol):
    """Protocol for the set of named cache stores.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Writes to a single key are atomic and the
    last write wins; no other coordination is provided.

    Example:
        ```python
        storage: CacheStorage = InMemoryCacheStorage()
        await storage.open("language-of-wearing-static-v1")
        await storage.put("language-of-wearing-static-v1", request, response)
        ```
    """

    async def open(self, name: str) -> None:
        """Create the named store if it does not exist yet.

        Args:
            name: Store name
        """
        ...

    async def has(self, name: str) -> bool:
        """Check whether a store exists.

        Args:
            name: Store name

        Returns:
            True if the store exists
        """
        ...

    async def keys(self) -> list[str]:
        """List the names of all existing stores.

        Returns:
            Store names
        """
        ...

    async def delete(self, name: str) -> bool:
        """Delete a store and every entry in it.

        Args:
            name: Store name

        Returns:
            True if a store was deleted, False if it did not exist
        """
        ...

    async def match(self, name: str, request: GatewayRequest) -> GatewayResponse | None:
        """Look up a request in one store.

        Args:
            name: Store name
            request: The request to match

        Returns:
            The stored response, or None on a miss
        """
        ...

    async def match_any(
        self,
        request: GatewayRequest,
        names: list[str] | None = None,
    ) -> GatewayResponse | None:
        """Look up a request across several stores, in order.

        Args:
            request: The request to match
            names: Stores to search; all stores when None

        Returns:
            The first stored response found, or None
        """
        ...

    async def put(self, name: str, request: GatewayRequest, response: GatewayResponse) -> None:
        """Store a response under a request, creating the store if needed.

        Args:
            name: Store name
            request: The request used as key
            response: The response to store
        """
        ...

    async def entries(self, name: str) -> list[tuple[str, str]]:
        """List the (method, url) keys held by a store.

        Args:
            name: Store name

        Returns:
            Keys in the store, empty if the store does not exist
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
