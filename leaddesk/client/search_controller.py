"""Incremental search controller: debounce, supersede, discard stale responses.

States: IDLE -> DEBOUNCING -> INFLIGHT -> RESOLVED | CANCELLED | ERRORED.

Every issued request bumps ``generation``, and so does every cancellation
(supersede, clear, short query, close). A response is applied only if its
generation is still the current one, so a late answer to a cancelled request
can never overwrite newer state. The cancelled request is also aborted
(httpx drops the connection).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from leaddesk.client.transport import SearchHit, SearchPayload, SearchTransport
from leaddesk.domain.exceptions import AuthenticationException, LeadDeskException

logger = logging.getLogger(__name__)

Listener = Callable[["SearchController"], None]


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    INFLIGHT = "inflight"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    ERRORED = "errored"


class SearchController:
    """Owns query, results and the single in-flight search generation.

    Must be used from within a running event loop (timers and requests are
    asyncio tasks).
    """

    def __init__(
        self,
        transport: SearchTransport,
        debounce_ms: int = 300,
        min_query_length: int = 2,
        limit: int = 10,
        recent_limit: int = 5,
    ) -> None:
        self.transport = transport
        self.debounce_ms = debounce_ms
        self.min_query_length = min_query_length
        self.limit = limit
        self.recent_limit = recent_limit

        self.query = ""
        self.filters: list[str] = []
        self.results: list[SearchHit] = []
        self.categories: dict[str, list[SearchHit]] = {}
        self.total_count = 0
        self.intents: list[str] = []
        self.is_loading = False
        self.error: str | None = None
        self.recent_searches: list[str] = []
        self.state = SearchState.IDLE
        self.generation = 0

        self._debounce_task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._background: set[asyncio.Task[Any]] = set()
        self._listeners: list[Listener] = []
        self._resolved_at: float | None = None

    # -- observers -----------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Call listener(controller) after every state change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -- lifecycle -----------------------------------------------------

    async def start(self) -> None:
        """Load recent searches (on mount)."""
        await self.refresh_recent()

    async def refresh_recent(self) -> None:
        try:
            self.recent_searches = await self.transport.recent_searches(self.recent_limit)
        except AuthenticationException:
            return
        except Exception as e:
            logger.warning("Could not load recent searches: %s", e)
            return
        self._notify()

    async def close(self) -> None:
        """Teardown: clear the timer, cancel the request, wait for pending work."""
        pending = [t for t in (self._debounce_task, self._inflight) if t is not None]
        self._cancel_debounce()
        if self._cancel_inflight():
            self.state = SearchState.CANCELLED
        self.is_loading = False
        pending.extend(self._background)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # -- queries -------------------------------------------------------

    def set_query(self, text: str, filters: Iterable[str] | None = None) -> None:
        """Keystroke: debounce a search, or clear at once when text is too short."""
        self.query = text
        if filters is not None:
            self.filters = list(filters)
        self._cancel_debounce()
        if len(text) < self.min_query_length:
            self._cancel_inflight()
            self._reset_results()
            self.state = SearchState.IDLE
            self._notify()
            return
        self.is_loading = True
        self.state = SearchState.DEBOUNCING
        self._debounce_task = asyncio.create_task(self._debounced(text, list(self.filters)))
        self._notify()

    async def _debounced(self, text: str, filters: list[str]) -> None:
        await asyncio.sleep(self.debounce_ms / 1000)
        self._debounce_task = None
        self._issue(text, filters)

    async def search(self, text: str, filters: Iterable[str] | None = None) -> None:
        """Issue a search now (no debounce) and wait until it settles."""
        self._cancel_debounce()
        task = self._issue(text, list(filters or ()))
        if task is not None:
            await asyncio.wait({task})

    def clear(self) -> None:
        """Reset query and results; cancels any pending timer and request."""
        self._cancel_debounce()
        self._cancel_inflight()
        self.query = ""
        self._reset_results()
        self.state = SearchState.IDLE
        self._notify()

    def _issue(self, text: str, filters: list[str]) -> asyncio.Task[None] | None:
        if len(text) < self.min_query_length:
            self._reset_results()
            self.state = SearchState.IDLE
            self._notify()
            return None
        if self._cancel_inflight():
            self.state = SearchState.CANCELLED
        self.generation += 1
        self.state = SearchState.INFLIGHT
        self.is_loading = True
        self.error = None
        task = asyncio.create_task(self._run(self.generation, text, filters))
        self._inflight = task
        self._notify()
        return task

    async def _run(self, generation: int, text: str, filters: list[str]) -> None:
        # Stays in _inflight until the recent-search refresh is done too, so
        # clear() and close() cancel that step as well.
        try:
            try:
                payload = await self.transport.search(text, filters, self.limit)
            except Exception as e:
                if generation != self.generation:
                    return
                message = e.message if isinstance(e, LeadDeskException) else "Search failed"
                logger.warning("Search for generation %d failed: %s", generation, e)
                self._fail(message)
                return
            if generation != self.generation:
                logger.debug("Discarding stale response for generation %d", generation)
                return
            self._apply(payload)
            await self.refresh_recent()
        finally:
            if self._inflight is asyncio.current_task():
                self._inflight = None

    def _apply(self, payload: SearchPayload) -> None:
        self.results = payload.results
        self.categories = payload.categories
        self.total_count = payload.total_count
        self.intents = payload.intents
        self.is_loading = False
        self.state = SearchState.RESOLVED
        self._resolved_at = asyncio.get_running_loop().time()
        self._notify()

    def _fail(self, message: str) -> None:
        self._reset_results()
        self.error = message
        self.state = SearchState.ERRORED
        self._notify()

    def _reset_results(self) -> None:
        self.results = []
        self.categories = {}
        self.total_count = 0
        self.intents = []
        self.is_loading = False
        self.error = None
        self._resolved_at = None

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _cancel_inflight(self) -> bool:
        """Cancel the current request; True when one was actually running.

        Bumps the generation, so the response is dropped even when the
        transport delivers it after the abort.
        """
        task, self._inflight = self._inflight, None
        if task is None or task.done():
            return False
        self.generation += 1
        task.cancel()
        return True

    # -- analytics -----------------------------------------------------

    def track_click(self, hit: SearchHit) -> None:
        """Record the selection in the background; failures are only logged."""
        elapsed_ms = None
        if self._resolved_at is not None:
            elapsed_ms = int((asyncio.get_running_loop().time() - self._resolved_at) * 1000)
        task = asyncio.create_task(
            self._send_click(self.query, hit, len(self.results), elapsed_ms)
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _send_click(
        self, query: str, hit: SearchHit, results_count: int, elapsed_ms: int | None
    ) -> None:
        try:
            await self.transport.record_click(query, hit, results_count, elapsed_ms)
        except AuthenticationException:
            return
        except Exception:
            logger.warning("Error tracking search click", exc_info=True)
