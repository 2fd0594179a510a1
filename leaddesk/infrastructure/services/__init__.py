"""Infrastructure services (background work outside the request path)."""

from leaddesk.infrastructure.services.search_history_recorder import SearchHistoryRecorder

__all__ = ["SearchHistoryRecorder"]
