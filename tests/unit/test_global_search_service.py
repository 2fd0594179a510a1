"""GlobalSearchService: fan-out, ranking, categories and degradation."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from leaddesk.application.dtos.search import (
    AgentRecord,
    CallRecord,
    LeadRecord,
    SearchResultItem,
    StaffRecord,
)
from leaddesk.application.search import NavigationSource, SettingsSource, default_sources
from leaddesk.application.use_cases.search import (
    GlobalSearchService,
    group_by_type,
    rank_results,
)
from leaddesk.domain.enums import ResultType


def _item(id: str, type: ResultType, score: int) -> SearchResultItem:
    return SearchResultItem(id, type, id, "", "/", score)


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.search_leads.return_value = []
    repo.search_staff.return_value = []
    repo.search_agents.return_value = []
    repo.search_calls.return_value = []
    return repo


@pytest.fixture
def service(repo) -> GlobalSearchService:
    return GlobalSearchService(
        sources=default_sources(repo),
        catalogues=[SettingsSource(), NavigationSource()],
    )


def test_rank_results_is_stable_for_equal_scores() -> None:
    items = [
        _item("a", ResultType.LEAD, 50),
        _item("b", ResultType.SETTING, 70),
        _item("c", ResultType.AGENT, 50),
        _item("d", ResultType.CALL, 70),
    ]
    assert [i.id for i in rank_results(items)] == ["b", "d", "a", "c"]


def test_group_by_type_keeps_rank_order() -> None:
    ranked = [
        _item("l1", ResultType.LEAD, 100),
        _item("n1", ResultType.NAVIGATION, 90),
        _item("l2", ResultType.LEAD, 99),
    ]
    categories = group_by_type(ranked)
    assert list(categories) == ["lead", "navigation"]
    assert [i.id for i in categories["lead"]] == ["l1", "l2"]


@pytest.mark.parametrize("query", ["", "a", " b ", None, 42])
async def test_short_or_non_string_query_returns_empty(service, repo, agent_caller, query) -> None:
    result = await service.aggregate(query, agent_caller, filters=["leads"])
    assert result.results == []
    assert result.categories == {}
    assert result.total_count == 0
    assert result.intents == ["text"]
    repo.search_leads.assert_not_awaited()


async def test_results_capped_but_categories_uncapped(service, repo, agent_caller) -> None:
    """results honours limit while categories and total_count keep every match."""
    repo.search_leads.return_value = [
        LeadRecord(f"l{i}", f"Acme {i}", None, None, "new", None) for i in range(5)
    ]
    repo.search_agents.return_value = [
        AgentRecord(f"a{i}", f"Acme bot {i}", "alloy", None, True) for i in range(3)
    ]

    result = await service.aggregate("acme", agent_caller, limit=4)

    assert len(result.results) == 4
    assert sum(len(v) for v in result.categories.values()) == 8
    assert len(result.categories["lead"]) == 5
    assert result.total_count == 8
    assert len(result.results) <= sum(len(v) for v in result.categories.values())


async def test_results_sorted_by_priority_descending(service, repo, agent_caller) -> None:
    repo.search_leads.return_value = [LeadRecord("l1", "Lead one", None, None, "new", None)]
    repo.search_calls.return_value = [CallRecord("c1", "done", 10, "lead follow-up", "X")]

    result = await service.aggregate("lead", agent_caller)

    scores = [i.priority_score for i in result.results]
    assert scores == sorted(scores, reverse=True)
    assert result.results[0].id == "l1"
    # navigation "Leads" (90) ranks between the lead (100) and the call (60)
    assert [i.type for i in result.results] == [
        ResultType.LEAD,
        ResultType.NAVIGATION,
        ResultType.CALL,
    ]


async def test_limit_defaults_and_caps(service) -> None:
    assert service.normalize_limit(None) == 10
    assert service.normalize_limit(-3) == 10
    assert service.normalize_limit("7") == 10
    assert service.normalize_limit(True) == 10
    assert service.normalize_limit(500) == 50
    assert service.normalize_limit(7) == 7


async def test_unknown_filters_leave_only_navigation(service, repo, agent_caller) -> None:
    result = await service.aggregate("dashboard", agent_caller, filters=["bogus", 3])
    repo.search_leads.assert_not_awaited()
    repo.search_staff.assert_not_awaited()
    assert list(result.categories) == ["navigation"]


def test_normalize_filters_drops_non_strings_only(service) -> None:
    assert service.normalize_filters(None) == frozenset()
    assert service.normalize_filters(["leads", 3, "bogus"]) == {"leads", "bogus"}


async def test_lead_source_failure_is_isolated(service, repo, agent_caller) -> None:
    repo.search_leads.side_effect = RuntimeError("db down")
    repo.search_agents.return_value = [AgentRecord("a1", "Analytics bot", "alloy", None, True)]
    repo.search_calls.return_value = [CallRecord("c1", "done", 5, "analytics review", "Ann")]

    result = await service.aggregate("analytics", agent_caller)

    assert "lead" not in result.categories
    assert {"agent", "call", "navigation"} <= set(result.categories)


async def test_john_staff_only_for_privileged(service, repo, agent_caller, admin_caller) -> None:
    repo.search_leads.return_value = [LeadRecord("l1", "John Smith", None, None, "new", None)]
    repo.search_staff.return_value = [StaffRecord("u1", "John Doe", "jd@x.io", None, "agent")]

    privileged = await service.aggregate("john", admin_caller)
    assert [i.title for i in privileged.categories["lead"]] == ["John Smith"]
    assert [i.title for i in privileged.categories["user"]] == ["John Doe"]

    regular = await service.aggregate("john", agent_caller)
    assert "user" not in regular.categories
    assert [i.title for i in regular.categories["lead"]] == ["John Smith"]


async def test_settings_query_hits_both_catalogues(service, agent_caller) -> None:
    result = await service.aggregate("settings", agent_caller)
    assert result.categories["setting"]
    assert result.categories["navigation"]


async def test_same_search_twice_is_identical(service, repo, agent_caller) -> None:
    repo.search_leads.return_value = [
        LeadRecord("l1", "Ann", None, None, "new", None),
        LeadRecord("l2", "Anna", None, None, "new", None),
    ]
    first = await service.aggregate("ann", agent_caller)
    second = await service.aggregate("ann", agent_caller)
    assert first.results == second.results
    assert first.categories == second.categories


async def test_sources_run_concurrently(repo, agent_caller) -> None:
    started: list[str] = []
    release = asyncio.Event()

    def blocking(name: str):
        async def _search(*args):
            started.append(name)
            await release.wait()
            return []

        return _search

    repo.search_leads.side_effect = blocking("leads")
    repo.search_agents.side_effect = blocking("agents")
    repo.search_calls.side_effect = blocking("calls")

    service = GlobalSearchService(default_sources(repo), [])

    task = asyncio.create_task(service.aggregate("acme", agent_caller))
    for _ in range(5):
        await asyncio.sleep(0)
    assert sorted(started) == ["agents", "calls", "leads"]
    release.set()
    await task


async def test_history_recorded_with_trimmed_query(repo, agent_caller) -> None:
    recorder = MagicMock()
    service = GlobalSearchService(default_sources(repo), [], history_recorder=recorder)
    await service.aggregate("  acme  ", agent_caller)
    recorder.assert_called_once_with("user-1", "acme")


async def test_history_failure_does_not_affect_response(repo, agent_caller) -> None:
    recorder = MagicMock(side_effect=RuntimeError("no loop"))
    service = GlobalSearchService(
        default_sources(repo), [NavigationSource()], history_recorder=recorder
    )
    result = await service.aggregate("dashboard", agent_caller)
    assert result.total_count == 1


async def test_aggregation_failure_degrades_to_empty(repo, agent_caller, monkeypatch) -> None:
    def boom(_query):
        raise ValueError("bad input")

    monkeypatch.setattr("leaddesk.application.use_cases.search.classify_intent", boom)
    service = GlobalSearchService(default_sources(repo), [NavigationSource()])
    result = await service.aggregate("dashboard", agent_caller)
    assert result.results == []
    assert result.intents == ["text"]
    assert result.query == "dashboard"
