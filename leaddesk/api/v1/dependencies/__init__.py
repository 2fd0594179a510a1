"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
"""

from leaddesk.api.v1.dependencies.caller import (
    get_caller_context,
    get_caller_id,
    get_user_repo,
)
from leaddesk.api.v1.dependencies.search import (
    get_global_search_service,
    get_history_recorder,
    get_recent_search_repo,
    get_recent_search_service,
    get_search_analytics_repo,
    get_search_click_service,
    get_search_repo,
)

__all__ = [
    "get_caller_context",
    "get_caller_id",
    "get_global_search_service",
    "get_history_recorder",
    "get_recent_search_repo",
    "get_recent_search_service",
    "get_search_analytics_repo",
    "get_search_click_service",
    "get_search_repo",
    "get_user_repo",
]
