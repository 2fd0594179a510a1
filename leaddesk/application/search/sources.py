"""Data-backed search sources (leads, staff accounts, agents, calls).

Each source applies the caller's type filter, picks its filter from the
detected intents, queries ISearchRepository and maps records to
SearchResultItem. A failing query is logged and contributes no results;
search() never raises.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, TypeVar

from leaddesk.application.dtos.search import (
    AgentRecord,
    CallRecord,
    LeadRecord,
    SearchResultItem,
    StaffRecord,
)
from leaddesk.domain.enums import ResultType, SearchIntent
from leaddesk.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
)

if TYPE_CHECKING:
    from leaddesk.application.dtos.user import CallerContext
    from leaddesk.application.interfaces.repositories import ISearchRepository

logger = logging.getLogger(__name__)

R = TypeVar("R")

CALL_SUBTITLE_LENGTH = 50


@dataclass(frozen=True)
class SourceRequest:
    """Per-request input shared by every source (classified and sanitized once)."""

    text: str
    needle: str
    pattern: str
    intents: tuple[SearchIntent, ...]
    caller: CallerContext
    limit: int
    filters: frozenset[str] = frozenset()

    def includes(self, result_type: ResultType) -> bool:
        return not self.filters or result_type.filter_key in self.filters


def rank_by_position(
    records: Iterable[R],
    base_priority: int,
    to_item: Callable[[R, int], SearchResultItem],
) -> list[SearchResultItem]:
    """Map records to items scored base_priority - position (input order kept)."""
    return [to_item(record, base_priority - idx) for idx, record in enumerate(records)]


class SearchSource(ABC):
    """Base class for a source queried concurrently by the aggregator."""

    result_type: ClassVar[ResultType]
    base_priority: ClassVar[int]

    def __init__(self, repo: ISearchRepository) -> None:
        self.repo = repo

    @property
    def name(self) -> str:
        return self.result_type.value

    def applies_to(self, request: SourceRequest) -> bool:
        """False when the type filter excludes this source (no query issued)."""
        return request.includes(self.result_type)

    async def search(self, request: SourceRequest) -> list[SearchResultItem]:
        """Return this source's ranked items; empty on filter miss or failure."""
        if not self.applies_to(request):
            return []
        with TracedOperation(
            f"search.source.{self.name}",
            {"search.source": self.name, "search.limit": request.limit},
        ):
            try:
                items = await self._search(request)
            except Exception as exc:
                logger.warning(
                    "%s search failed for caller %s: %s",
                    self.name,
                    request.caller.caller_id,
                    exc,
                    exc_info=True,
                )
                set_span_error(exc)
                return []
            add_span_attributes(**{"search.hits": len(items)})
            return items

    @abstractmethod
    async def _search(self, request: SourceRequest) -> list[SearchResultItem]:
        """Query the repository and map records (may raise)."""


class LeadSource(SearchSource):
    """Leads in the caller's tenant (every tenant for cross-tenant callers)."""

    result_type = ResultType.LEAD
    base_priority = 100

    @staticmethod
    def match_fields(intents: Sequence[SearchIntent]) -> tuple[str, ...]:
        """Email intent narrows to email, phone intent to mobile; else all three."""
        if SearchIntent.EMAIL in intents:
            return ("email",)
        if SearchIntent.PHONE in intents:
            return ("mobile",)
        return ("name", "email", "mobile")

    async def _search(self, request: SourceRequest) -> list[SearchResultItem]:
        records = await self.repo.search_leads(
            request.caller.tenant_scope,
            request.pattern,
            self.match_fields(request.intents),
            request.limit,
        )
        return rank_by_position(records, self.base_priority, self._to_item)

    @staticmethod
    def _to_item(lead: LeadRecord, score: int) -> SearchResultItem:
        return SearchResultItem(
            id=lead.id,
            type=ResultType.LEAD,
            title=lead.name or "Unknown Lead",
            subtitle=lead.email or lead.mobile or lead.status,
            redirect_url=f"/leads/{lead.id}",
            priority_score=score,
            metadata={"status": lead.status, "source": lead.source},
        )


class StaffSource(SearchSource):
    """Staff accounts; only privileged callers get results."""

    result_type = ResultType.USER
    base_priority = 80

    def applies_to(self, request: SourceRequest) -> bool:
        return request.caller.is_privileged and super().applies_to(request)

    async def _search(self, request: SourceRequest) -> list[SearchResultItem]:
        records = await self.repo.search_staff(
            request.caller.tenant_id, request.pattern, request.limit
        )
        return rank_by_position(records, self.base_priority, self._to_item)

    @staticmethod
    def _to_item(user: StaffRecord, score: int) -> SearchResultItem:
        return SearchResultItem(
            id=user.id,
            type=ResultType.USER,
            title=user.name or "Unknown User",
            subtitle=user.email or user.role,
            redirect_url="/settings",
            priority_score=score,
            metadata={"role": user.role},
        )


class AgentSource(SearchSource):
    """AI voice agents matched by name."""

    result_type = ResultType.AGENT
    base_priority = 70

    async def _search(self, request: SourceRequest) -> list[SearchResultItem]:
        records = await self.repo.search_agents(
            request.caller.tenant_id, request.pattern, request.limit
        )
        return rank_by_position(records, self.base_priority, self._to_item)

    @staticmethod
    def _to_item(agent: AgentRecord, score: int) -> SearchResultItem:
        state = "Active" if agent.is_active else "Inactive"
        return SearchResultItem(
            id=agent.id,
            type=ResultType.AGENT,
            title=agent.name,
            subtitle=f"{agent.voice} voice - {state}",
            redirect_url="/agents",
            priority_score=score,
            metadata={"voice": agent.voice, "isActive": agent.is_active},
        )


class CallSource(SearchSource):
    """Calls matched on summary or transcript, titled by their lead."""

    result_type = ResultType.CALL
    base_priority = 60

    async def _search(self, request: SourceRequest) -> list[SearchResultItem]:
        records = await self.repo.search_calls(
            request.caller.tenant_id, request.pattern, request.limit
        )
        return rank_by_position(records, self.base_priority, self._to_item)

    @staticmethod
    def _to_item(call: CallRecord, score: int) -> SearchResultItem:
        summary = (call.summary or "")[:CALL_SUBTITLE_LENGTH]
        return SearchResultItem(
            id=call.id,
            type=ResultType.CALL,
            title=f"Call with {call.lead_name or 'Unknown'}",
            subtitle=summary or call.status,
            redirect_url="/call-analytics",
            priority_score=score,
            metadata={"status": call.status, "duration": call.duration},
        )


def default_sources(repo: ISearchRepository) -> list[SearchSource]:
    """The four data-backed sources in concatenation order."""
    return [LeadSource(repo), StaffSource(repo), AgentSource(repo), CallSource(repo)]
