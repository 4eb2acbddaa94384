"""In-process implementation of CacheStorage."""

from offline_gateway.entities import GatewayRequest, GatewayResponse


class InMemoryCacheStorage:
    """Dictionary-backed cache stores.

    This class satisfies the CacheStorage protocol through structural
    typing - no explicit inheritance needed. Stores keep their creation
    order, which is the order ``keys()`` reports.
    """

    def __init__(self) -> None:
        self._stores: dict[str, dict[tuple[str, str], GatewayResponse]] = {}

    async def open(self, name: str) -> None:
        self._stores.setdefault(name, {})

    async def has(self, name: str) -> bool:
        return name in self._stores

    async def keys(self) -> list[str]:
        return list(self._stores)

    async def delete(self, name: str) -> bool:
        return self._stores.pop(name, None) is not None

    async def match(self, name: str, request: GatewayRequest) -> GatewayResponse | None:
        store = self._stores.get(name)
        if store is None:
            return None
        return store.get(request.cache_key)

    async def match_any(
        self,
        request: GatewayRequest,
        names: list[str] | None = None,
    ) -> GatewayResponse | None:
        for name in names if names is not None else list(self._stores):
            response = await self.match(name, request)
            if response is not None:
                return response
        return None

    async def put(self, name: str, request: GatewayRequest, response: GatewayResponse) -> None:
        self._stores.setdefault(name, {})[request.cache_key] = response

    async def entries(self, name: str) -> list[tuple[str, str]]:
        return list(self._stores.get(name, {}))

    async def close(self) -> None:
        """Nothing to release; stores live as long as the object."""
