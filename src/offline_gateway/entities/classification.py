"""Strategy and lifecycle enums."""

from enum import Enum


class StrategyKind(str, Enum):
    """Caching strategy selected for a request URL."""

    NETWORK_FIRST = "network-first"
    CACHE_FIRST = "cache-first"
    STALE_WHILE_REVALIDATE = "stale-while-revalidate"


class WorkerState(str, Enum):
    """Lifecycle state of a gateway instance."""

    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
