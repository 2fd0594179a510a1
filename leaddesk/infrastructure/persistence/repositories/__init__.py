"""SQLAlchemy repository implementations of the application ports."""

from leaddesk.infrastructure.persistence.repositories.recent_search_repo import (
    RecentSearchRepository,
)
from leaddesk.infrastructure.persistence.repositories.search_analytics_repo import (
    SearchAnalyticsRepository,
)
from leaddesk.infrastructure.persistence.repositories.search_repo import SearchRepository
from leaddesk.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "RecentSearchRepository",
    "SearchAnalyticsRepository",
    "SearchRepository",
    "UserRepository",
]
