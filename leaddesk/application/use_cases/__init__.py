"""Application use cases."""

from leaddesk.application.use_cases.search import (
    GlobalSearchService,
    group_by_type,
    rank_results,
)
from leaddesk.application.use_cases.search_history import (
    RecentSearchService,
    SearchClickService,
)

__all__ = [
    "GlobalSearchService",
    "RecentSearchService",
    "SearchClickService",
    "group_by_type",
    "rank_results",
]
