"""Background sync hook.

Intended to replay form submissions that were queued while offline once
connectivity returns. No queue exists yet, so a flush only records that it
ran.
"""

import logging

logger = logging.getLogger(__name__)


class BackgroundSync:
    """Handle sync signals for one tag.

    Args:
        tag: The sync tag this handler responds to
    """

    def __init__(self, tag: str) -> None:
        self._tag = tag
        self.flush_count = 0

    @property
    def tag(self) -> str:
        return self._tag

    def handles(self, tag: str) -> bool:
        return tag == self._tag

    async def flush(self) -> None:
        """Submit pending form data. Nothing is queued yet, so this only logs."""
        logger.info("Syncing cached form data...")
        self.flush_count += 1
