"""Global search API schemas.

Wire format is camelCase (redirectUrl, priorityScore, totalCount, ...).
The request model is deliberately lenient: a present but non-string query
and a malformed limit are normalized by the search service instead of
being rejected. Only a missing query field is a 422.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leaddesk.application.dtos.search import (
    AggregatedSearch,
    RecentSearchResult,
    SearchResultItem,
)


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases; accepts both spellings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(CamelModel):
    """Body of POST /search."""

    query: Any = Field(..., description="Search text; at least 2 characters to match")
    filters: list[Any] | None = Field(
        default=None,
        description="Subset of leads, users, agents, calls, settings, navigation",
    )
    limit: Any = Field(default=None, description="Max flat results (default 10, max 50)")


class SearchResultResponse(CamelModel):
    """One search hit."""

    id: str
    type: str
    title: str
    subtitle: str | None = None
    redirect_url: str
    priority_score: int
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_item(cls, item: SearchResultItem) -> "SearchResultResponse":
        return cls(
            id=item.id,
            type=item.type.value,
            title=item.title,
            subtitle=item.subtitle,
            redirect_url=item.redirect_url,
            priority_score=item.priority_score,
            metadata=item.metadata,
        )


class SearchResponse(CamelModel):
    """Aggregated search response. results is capped at limit; categories is not."""

    results: list[SearchResultResponse]
    categories: dict[str, list[SearchResultResponse]]
    total_count: int
    query: str
    intents: list[str]

    @classmethod
    def from_result(cls, result: AggregatedSearch) -> "SearchResponse":
        return cls(
            results=[SearchResultResponse.from_item(i) for i in result.results],
            categories={
                key: [SearchResultResponse.from_item(i) for i in items]
                for key, items in result.categories.items()
            },
            total_count=result.total_count,
            query=result.query,
            intents=result.intents,
        )


class RecentSearchResponse(CamelModel):
    query: str
    created_at: datetime | None = None

    @classmethod
    def from_result(cls, item: RecentSearchResult) -> "RecentSearchResponse":
        return cls(query=item.query, created_at=item.created_at)


class SearchClickRequest(CamelModel):
    """Body of POST /search/clicks (one result selection)."""

    query: str = Field(..., max_length=500)
    result_type: str
    result_id: str = Field(..., min_length=1)
    results_count: int = Field(default=0, ge=0)
    time_to_click_ms: int | None = Field(default=None, ge=0)


class SearchClickAcceptedResponse(BaseModel):
    status: str = "accepted"
