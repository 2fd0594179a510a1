"""SearchController: debounce, supersede/cancel, stale-response discard."""

import asyncio

import pytest

from leaddesk.client import (
    CommandPalette,
    SearchController,
    SearchHit,
    SearchPayload,
    SearchState,
)
from leaddesk.domain.exceptions import AuthenticationException, SearchRequestException


def payload(*titles: str) -> SearchPayload:
    hits = [
        SearchHit(id=t, type="lead", title=t, subtitle=None, redirect_url=f"/leads/{t}",
                  priority_score=100 - i)
        for i, t in enumerate(titles)
    ]
    return SearchPayload(results=hits, categories={"lead": hits}, total_count=len(hits))


class FakeTransport:
    """Requests stay pending until respond()/fail() is called for their query."""

    def __init__(self, ignore_cancel: bool = False) -> None:
        self.ignore_cancel = ignore_cancel
        self.calls: list[tuple[str, list[str], int]] = []
        self.pending: dict[str, asyncio.Future] = {}
        self.recent = ["older query"]
        self.recent_calls = 0
        self.clicks: list[tuple] = []

    async def search(self, query, filters=(), limit=10):
        self.calls.append((query, list(filters), limit))
        future = asyncio.get_running_loop().create_future()
        self.pending[query] = future
        if not self.ignore_cancel:
            return await future
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            # Network layer that delivers the response despite the abort.
            return await future

    def respond(self, query: str, result: SearchPayload) -> None:
        future = self.pending[query]
        if not future.done():
            future.set_result(result)

    def fail(self, query: str, exc: Exception) -> None:
        self.pending[query].set_exception(exc)

    async def recent_searches(self, limit=5):
        self.recent_calls += 1
        return list(self.recent)

    async def record_click(self, query, hit, results_count, time_to_click_ms=None):
        self.clicks.append((query, hit.id, results_count, time_to_click_ms))


async def settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
async def controller(transport):
    ctrl = SearchController(transport, debounce_ms=10)
    yield ctrl
    await ctrl.close()


async def test_start_loads_recent_searches(controller, transport) -> None:
    await controller.start()
    assert controller.recent_searches == ["older query"]


async def test_keystrokes_are_debounced_into_one_request(controller, transport) -> None:
    controller.set_query("ac")
    assert controller.state is SearchState.DEBOUNCING
    assert controller.is_loading is True
    controller.set_query("acm")
    controller.set_query("acme")

    await asyncio.sleep(0.05)

    assert [c[0] for c in transport.calls] == ["acme"]
    assert controller.state is SearchState.INFLIGHT


async def test_response_resolves_and_refreshes_recent(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    transport.respond("acme", payload("Acme One", "Acme Two"))
    await task

    assert controller.state is SearchState.RESOLVED
    assert [h.title for h in controller.results] == ["Acme One", "Acme Two"]
    assert list(controller.categories) == ["lead"]
    assert controller.is_loading is False
    assert transport.recent_calls == 1


async def test_late_response_of_superseded_search_is_discarded(transport) -> None:
    """B issued before A answers: only B's response is ever displayed."""
    transport.ignore_cancel = True
    controller = SearchController(transport, debounce_ms=0)

    search_a = asyncio.create_task(controller.search("alpha"))
    await settle()
    search_b = asyncio.create_task(controller.search("beta"))
    await settle()
    assert [c[0] for c in transport.calls] == ["alpha", "beta"]

    transport.respond("beta", payload("Beta"))
    await search_b
    transport.respond("alpha", payload("Alpha"))
    await search_a

    assert [h.title for h in controller.results] == ["Beta"]
    assert controller.state is SearchState.RESOLVED
    await controller.close()


async def test_superseded_request_is_cancelled(controller, transport) -> None:
    search_a = asyncio.create_task(controller.search("alpha"))
    await settle()
    search_b = asyncio.create_task(controller.search("beta"))
    await settle()

    assert transport.pending["alpha"].cancelled()
    transport.respond("beta", payload("Beta"))
    await asyncio.gather(search_a, search_b)
    assert [h.title for h in controller.results] == ["Beta"]


async def test_short_query_clears_immediately(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    transport.respond("acme", payload("Acme"))
    await task

    controller.set_query("a")

    assert controller.results == []
    assert controller.categories == {}
    assert controller.is_loading is False
    assert controller.state is SearchState.IDLE
    await asyncio.sleep(0.03)
    assert [c[0] for c in transport.calls] == ["acme"]


async def test_short_query_cancels_pending_request(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    controller.set_query("")
    await task
    assert transport.pending["acme"].cancelled()
    assert controller.state is SearchState.IDLE


async def test_request_failure_sets_errored(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    transport.fail("acme", SearchRequestException(500))
    await task

    assert controller.state is SearchState.ERRORED
    assert controller.error == "Search request failed"
    assert controller.results == []


async def test_missing_session_reports_not_authenticated(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    transport.fail("acme", AuthenticationException("Not authenticated"))
    await task

    assert controller.state is SearchState.ERRORED
    assert controller.error == "Not authenticated"


async def test_filters_and_limit_are_sent(transport) -> None:
    controller = SearchController(transport, debounce_ms=0, limit=7)
    controller.set_query("acme", filters=["leads", "calls"])
    await settle()
    assert transport.calls == [("acme", ["leads", "calls"], 7)]
    await controller.close()


async def test_close_cancels_timer_and_request(controller, transport) -> None:
    task = asyncio.create_task(controller.search("alpha"))
    await settle()
    controller.set_query("beta")

    await controller.close()
    await controller.close()
    await task

    assert controller.state is SearchState.CANCELLED
    assert transport.pending["alpha"].cancelled()
    await asyncio.sleep(0.03)
    assert [c[0] for c in transport.calls] == ["alpha"]


async def test_clear_resets_everything(controller, transport) -> None:
    controller.set_query("acme")
    controller.clear()
    assert controller.query == ""
    assert controller.state is SearchState.IDLE
    assert controller.is_loading is False
    await asyncio.sleep(0.03)
    assert transport.calls == []


async def test_track_click_reports_query_and_count(controller, transport) -> None:
    task = asyncio.create_task(controller.search("acme"))
    controller.query = "acme"
    await settle()
    transport.respond("acme", payload("Acme One", "Acme Two"))
    await task

    controller.track_click(controller.results[1])
    await settle()

    (click,) = transport.clicks
    assert click[:3] == ("acme", "Acme Two", 2)
    assert click[3] is not None and click[3] >= 0


async def test_response_after_palette_close_is_dropped(transport) -> None:
    transport.ignore_cancel = True
    controller = SearchController(transport, debounce_ms=0)
    palette = CommandPalette(controller, navigate=lambda url: None)
    palette.open()
    task = asyncio.create_task(controller.search("acme"))
    await settle()

    palette.close()
    transport.respond("acme", payload("Stale Acme"))
    await task
    await settle()

    assert controller.results == []
    assert controller.categories == {}
    assert controller.state is SearchState.IDLE
    await controller.close()


async def test_response_after_short_query_is_dropped(transport) -> None:
    transport.ignore_cancel = True
    controller = SearchController(transport, debounce_ms=0)
    task = asyncio.create_task(controller.search("acme"))
    await settle()

    controller.set_query("a")
    transport.respond("acme", payload("Stale Acme"))
    await task
    await settle()

    assert controller.query == "a"
    assert controller.results == []
    assert controller.state is SearchState.IDLE
    await controller.close()


async def test_response_after_clear_is_dropped(transport) -> None:
    transport.ignore_cancel = True
    controller = SearchController(transport, debounce_ms=0)
    task = asyncio.create_task(controller.search("acme"))
    await settle()

    controller.clear()
    transport.respond("acme", payload("Stale Acme"))
    await task

    assert controller.results == []
    assert controller.state is SearchState.IDLE
    await controller.close()


class GatedRecentTransport(FakeTransport):
    """recent_searches() blocks until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()
        self.recent_done = 0

    async def recent_searches(self, limit=5):
        await self.gate.wait()
        self.recent_done += 1
        return list(self.recent)


async def test_close_cancels_recent_refresh_after_resolve() -> None:
    transport = GatedRecentTransport()
    controller = SearchController(transport, debounce_ms=0)
    task = asyncio.create_task(controller.search("acme"))
    await settle()
    transport.respond("acme", payload("Acme"))
    await settle()
    assert controller.state is SearchState.RESOLVED

    notified: list[SearchState] = []
    controller.add_listener(lambda c: notified.append(c.state))
    await controller.close()
    transport.gate.set()
    await settle()

    assert task.done()
    assert notified == []
    assert transport.recent_done == 0
    assert controller.recent_searches == []
