"""CommandPalette keyboard handling, selection and highlighting."""

import asyncio

import pytest

from leaddesk.client import (
    ActionMenuState,
    CommandPalette,
    SearchController,
    SearchHit,
    SearchPayload,
    highlight_segments,
)


def hit(id: str, type: str = "lead") -> SearchHit:
    return SearchHit(id=id, type=type, title=id.title(), subtitle=None,
                     redirect_url=f"/{type}s/{id}", priority_score=50)


class ImmediateTransport:
    def __init__(self, payload: SearchPayload) -> None:
        self.payload = payload
        self.clicks: list[str] = []

    async def search(self, query, filters=(), limit=10):
        return self.payload

    async def recent_searches(self, limit=5):
        return []

    async def record_click(self, query, hit, results_count, time_to_click_ms=None):
        self.clicks.append(hit.id)


@pytest.fixture
def payload() -> SearchPayload:
    leads = [hit("ann"), hit("anna")]
    pages = [hit("dashboard", "navigation")]
    # categories are uncapped: one more lead than the capped results list
    return SearchPayload(
        results=leads[:1] + pages,
        categories={"lead": leads, "navigation": pages},
        total_count=3,
    )


@pytest.fixture
def transport(payload) -> ImmediateTransport:
    return ImmediateTransport(payload)


@pytest.fixture
async def palette(transport):
    controller = SearchController(transport, debounce_ms=0)
    visited: list[str] = []
    palette = CommandPalette(controller, visited.append)
    palette.visited = visited
    yield palette
    await controller.close()


async def test_ctrl_or_meta_k_toggles(palette) -> None:
    assert palette.handle_global_key("k", ctrl=True) is True
    assert palette.is_open
    assert palette.handle_global_key("K", meta=True) is True
    assert not palette.is_open


async def test_slash_opens_only_outside_inputs(palette) -> None:
    assert palette.handle_global_key("/", input_focused=True) is False
    assert not palette.is_open
    assert palette.handle_global_key("/") is True
    assert palette.is_open
    assert palette.handle_global_key("/") is False


async def test_plain_keys_are_not_consumed(palette) -> None:
    assert palette.handle_global_key("k") is False
    assert palette.handle_key("a") is False


async def test_selection_wraps_on_empty_list(palette) -> None:
    palette.open()
    palette.handle_key("ArrowDown")
    assert palette.selected_index == 0
    palette.handle_key("ArrowUp")
    assert palette.selected_index == 0
    assert palette.selected is None
    assert palette.activate() is None


async def test_selection_is_circular_over_all_sections(palette) -> None:
    palette.open()
    await palette.controller.search("ann")

    assert [h.id for h in palette.flat_results] == ["ann", "anna", "dashboard"]
    palette.handle_key("ArrowUp")
    assert palette.selected.id == "dashboard"
    palette.handle_key("ArrowDown")
    assert palette.selected_index == 0
    palette.move_selection(4)
    assert palette.selected.id == "anna"


async def test_new_results_reset_selection(palette, transport) -> None:
    palette.open()
    await palette.controller.search("ann")
    palette.hover(2)
    assert palette.selected_index == 2

    transport.payload = SearchPayload(
        results=[hit("anna")], categories={"lead": [hit("anna")]}, total_count=1
    )
    await palette.controller.search("anna")

    assert palette.selected_index == 0


async def test_hover_ignores_out_of_range(palette) -> None:
    await palette.controller.search("ann")
    palette.hover(1)
    palette.hover(10)
    palette.hover(-1)
    assert palette.selected_index == 1


async def test_enter_tracks_navigates_and_closes(palette, transport) -> None:
    palette.open()
    palette.set_query("ann")
    await asyncio.sleep(0.01)
    palette.handle_key("ArrowDown")

    assert palette.handle_key("Enter") is True
    await asyncio.sleep(0)

    assert palette.visited == ["/leads/anna"]
    assert transport.clicks == ["anna"]
    assert not palette.is_open
    assert palette.controller.query == ""
    assert palette.controller.results == []


async def test_escape_closes_without_navigating(palette) -> None:
    palette.open()
    await palette.controller.search("ann")
    palette.handle_key("Escape")
    assert not palette.is_open
    assert palette.visited == []


async def test_click_outside_closes(palette) -> None:
    palette.open()
    palette.click_outside()
    assert not palette.is_open


async def test_sections_use_display_labels(palette) -> None:
    await palette.controller.search("ann")
    assert [label for label, _ in palette.sections()] == ["Leads", "Pages"]


async def test_select_recent_runs_that_query(palette) -> None:
    palette.select_recent("acme corp")
    assert palette.controller.query == "acme corp"
    await asyncio.sleep(0.01)
    assert palette.controller.total_count == 3


def test_highlight_marks_every_case_insensitive_match() -> None:
    assert highlight_segments("Ann and ANNA", "ann") == [
        ("Ann", True),
        (" and ", False),
        ("ANN", True),
        ("A", False),
    ]


def test_highlight_escapes_regex_characters() -> None:
    assert highlight_segments("cost (usd)", "(usd)") == [("cost ", False), ("(usd)", True)]


@pytest.mark.parametrize("query", ["", "a"])
def test_highlight_needs_two_characters(query) -> None:
    assert highlight_segments("Anna", query) == [("Anna", False)]


def test_action_menu_keeps_one_open() -> None:
    menu = ActionMenuState()
    menu.open("a")
    menu.toggle("b")
    assert menu.is_open("b")
    assert not menu.is_open("a")
    menu.toggle("b")
    assert menu.open_menu_id is None
    menu.open("c")
    menu.close()
    assert menu.open_menu_id is None


async def test_row_action_menu_is_exclusive_and_escape_closes_it_first(palette) -> None:
    palette.open()
    await palette.controller.search("ann")

    palette.toggle_actions(0)
    palette.toggle_actions(1)
    assert palette.action_menu.is_open("anna")
    assert not palette.action_menu.is_open("ann")
    palette.toggle_actions(10)
    assert palette.action_menu.open_menu_id == "anna"

    palette.handle_key("Escape")
    assert palette.action_menu.open_menu_id is None
    assert palette.is_open

    palette.handle_key("Escape")
    assert not palette.is_open


async def test_action_menu_closes_on_new_results_and_close(palette, transport) -> None:
    palette.open()
    await palette.controller.search("ann")
    palette.toggle_actions(0)

    transport.payload = SearchPayload(
        results=[hit("anna")], categories={"lead": [hit("anna")]}, total_count=1
    )
    await palette.controller.search("anna")
    assert palette.action_menu.open_menu_id is None

    palette.toggle_actions(0)
    palette.close()
    assert palette.action_menu.open_menu_id is None
