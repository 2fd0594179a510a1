"""Application DTOs (no ORM dependency)."""

from leaddesk.application.dtos.search import (
    AgentRecord,
    AggregatedSearch,
    CallRecord,
    LeadRecord,
    RecentSearchResult,
    SearchClickCreate,
    SearchResultItem,
    StaffRecord,
)
from leaddesk.application.dtos.user import CallerContext, UserResult

__all__ = [
    "AgentRecord",
    "AggregatedSearch",
    "CallRecord",
    "CallerContext",
    "LeadRecord",
    "RecentSearchResult",
    "SearchClickCreate",
    "SearchResultItem",
    "StaffRecord",
    "UserResult",
]
