"""Fire-and-forget recent-search writes.

record() schedules the upsert on the running loop and returns at once, so
the search response never waits for (or fails because of) the history
write. Pending tasks are tracked until they finish so shutdown can drain
them instead of leaving writes half-done.
"""

from __future__ import annotations

import asyncio
import logging

from leaddesk.application.interfaces.repositories import IRecentSearchRepository

logger = logging.getLogger(__name__)


class SearchHistoryRecorder:
    """Schedules RecentSearchRepository.touch() as background tasks."""

    def __init__(self, recent_repo: IRecentSearchRepository) -> None:
        self.recent_repo = recent_repo
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def record(self, user_id: str, query: str) -> None:
        """Schedule an upsert of (user_id, query). Must be called from a running loop."""
        if self._closed:
            logger.debug("Recorder closed; dropping recent search for %s", user_id)
            return
        task = asyncio.create_task(self._touch(user_id, query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _touch(self, user_id: str, query: str) -> None:
        try:
            await self.recent_repo.touch(user_id, query)
        except Exception:
            logger.warning(
                "Recent search write failed for user %s", user_id, exc_info=True
            )

    async def drain(self) -> None:
        """Wait for every scheduled write to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Stop accepting writes and drain the pending ones (app shutdown)."""
        self._closed = True
        await self.drain()
