"""DTOs for global search (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from leaddesk.domain.enums import ResultType


@dataclass(frozen=True)
class SearchResultItem:
    """Single search hit in the uniform result shape.

    priority_score only orders the merged list; it has no persisted meaning.
    """

    id: str
    type: ResultType
    title: str
    subtitle: str
    redirect_url: str
    priority_score: int
    metadata: dict[str, Any] | None = None


@dataclass
class AggregatedSearch:
    """Merged, ranked and categorized search response.

    results is capped at the requested limit; categories and total_count
    cover every match.
    """

    results: list[SearchResultItem]
    categories: dict[str, list[SearchResultItem]]
    total_count: int
    query: str
    intents: list[str]

    @classmethod
    def empty(cls, query: str, intents: list[str] | None = None) -> "AggregatedSearch":
        return cls(
            results=[],
            categories={},
            total_count=0,
            query=query,
            intents=intents if intents is not None else ["text"],
        )


# Source records (read-models returned by SearchRepository)


@dataclass(frozen=True)
class LeadRecord:
    id: str
    name: str | None
    email: str | None
    mobile: str | None
    status: str
    source: str | None


@dataclass(frozen=True)
class StaffRecord:
    id: str
    name: str | None
    email: str | None
    phone: str | None
    role: str


@dataclass(frozen=True)
class AgentRecord:
    id: str
    name: str
    voice: str
    tone: str | None
    is_active: bool


@dataclass(frozen=True)
class CallRecord:
    id: str
    status: str
    duration: int | None
    summary: str | None
    lead_name: str | None
    created_at: datetime | None = None


# Search history and analytics


@dataclass(frozen=True)
class RecentSearchResult:
    """One entry of the caller's recent searches."""

    query: str
    created_at: datetime


@dataclass(frozen=True)
class SearchClickCreate:
    """Analytics event recorded when a caller selects a result."""

    caller_id: str
    tenant_id: str | None
    query: str
    result_type: str
    result_id: str
    results_count: int
    time_to_click_ms: int | None = None
