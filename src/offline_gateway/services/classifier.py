"""URL classification into caching strategies."""

import re
from collections.abc import Iterable

from offline_gateway.config import CACHE_FIRST_PATTERNS, NETWORK_FIRST_PATTERNS
from offline_gateway.entities import StrategyKind

# Schemes the gateway intercepts; everything else is left to the host.
INTERCEPTED_SCHEMES = frozenset({"http", "https"})


class ResourceClassifier:
    """Map a request URL to exactly one caching strategy.

    Network-first patterns are tested before cache-first patterns; a URL
    matching neither falls through to stale-while-revalidate. Patterns are
    searched anywhere in the full URL string.

    Example:
        ```python
        classifier = ResourceClassifier()
        classifier.classify("https://x.supabase.co/rest/v1/responses")
        # StrategyKind.NETWORK_FIRST
        ```
    """

    def __init__(
        self,
        network_first: Iterable[str] = NETWORK_FIRST_PATTERNS,
        cache_first: Iterable[str] = CACHE_FIRST_PATTERNS,
    ) -> None:
        self._network_first = tuple(re.compile(p) for p in network_first)
        self._cache_first = tuple(re.compile(p) for p in cache_first)

    def is_network_first(self, url: str) -> bool:
        return any(p.search(url) for p in self._network_first)

    def is_cache_first(self, url: str) -> bool:
        return any(p.search(url) for p in self._cache_first)

    def classify(self, url: str) -> StrategyKind:
        """Select the strategy for a URL.

        Args:
            url: Absolute request URL

        Returns:
            The StrategyKind to use
        """
        if self.is_network_first(url):
            return StrategyKind.NETWORK_FIRST
        if self.is_cache_first(url):
            return StrategyKind.CACHE_FIRST
        return StrategyKind.STALE_WHILE_REVALIDATE

    @property
    def patterns(self) -> dict[str, list[str]]:
        return {
            StrategyKind.NETWORK_FIRST.value: [p.pattern for p in self._network_first],
            StrategyKind.CACHE_FIRST.value: [p.pattern for p in self._cache_first],
        }
