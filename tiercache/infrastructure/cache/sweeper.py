"""Optional periodic expiry sweep.

Lazy expiry leaves expired-but-unread entries in memory until they are
touched. ExpirySweeper bounds that by calling CacheStore.purge_expired() on a
fixed interval from an asyncio background task, independent of the
get/set path.
"""

import asyncio
import logging
from typing import Optional

from tiercache.domain.interfaces.cache import CacheStore
from tiercache.domain.models.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Cancellable background task that purges expired cache entries."""

    def __init__(self, store: CacheStore, interval_seconds: float):
        if interval_seconds <= 0:
            raise InvalidArgumentError(f"Sweep interval must be positive, got {interval_seconds}")
        self.store = store
        self.interval_seconds = interval_seconds
        self.total_removed = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        """Runs a single purge pass and returns the number of entries removed."""
        removed = self.store.purge_expired()
        self.total_removed += removed
        return removed

    async def _run(self) -> None:
        logger.info(f"Expiry sweeper started (interval={self.interval_seconds}s)")
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                try:
                    removed = self.sweep_once()
                    if removed:
                        logger.debug(f"Sweep removed {removed} expired entries")
                except Exception as e:
                    # A failed pass must not end the sweep loop.
                    logger.error(f"Expiry sweep failed: {e}", exc_info=True)
        finally:
            logger.info("Expiry sweeper stopped")

    def start(self) -> asyncio.Task:
        """Schedules the sweep loop on the running event loop.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        if self.running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Cancels the sweep loop and waits for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
