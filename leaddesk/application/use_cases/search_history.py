"""Recent searches and result-click analytics use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from leaddesk.application.dtos.search import RecentSearchResult, SearchClickCreate
from leaddesk.application.dtos.user import CallerContext
from leaddesk.domain.enums import ResultType
from leaddesk.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from leaddesk.application.interfaces.repositories import (
        IRecentSearchRepository,
        ISearchAnalyticsRepository,
    )

logger = logging.getLogger(__name__)


class RecentSearchService:
    """Reads the caller's recent searches (newest first)."""

    def __init__(
        self,
        recent_repo: "IRecentSearchRepository",
        default_limit: int = 5,
        max_limit: int = 10,
    ) -> None:
        self.recent_repo = recent_repo
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def list_recent(
        self, caller: CallerContext, limit: int | None = None
    ) -> list[RecentSearchResult]:
        if limit is None or limit <= 0:
            limit = self.default_limit
        return await self.recent_repo.list_recent(caller.caller_id, min(limit, self.max_limit))


class SearchClickService:
    """Records which result a caller selected (write-only, best-effort)."""

    def __init__(self, analytics_repo: "ISearchAnalyticsRepository") -> None:
        self.analytics_repo = analytics_repo

    async def record_click(
        self,
        caller: CallerContext,
        query: str,
        result_type: str,
        result_id: str,
        results_count: int,
        time_to_click_ms: int | None = None,
    ) -> bool:
        """Persist the click; return False when the write failed (never raises on I/O).

        Raises:
            ValidationException: If result_type is not a known result type.
        """
        if result_type not in ResultType.values():
            raise ValidationException(
                f"Unknown result type: {result_type}", field="resultType"
            )
        event = SearchClickCreate(
            caller_id=caller.caller_id,
            tenant_id=caller.tenant_id,
            query=query,
            result_type=result_type,
            result_id=result_id,
            results_count=max(0, results_count),
            time_to_click_ms=time_to_click_ms,
        )
        try:
            await self.analytics_repo.record_click(event)
        except Exception:
            logger.warning(
                "Search click analytics write failed for caller %s",
                caller.caller_id,
                exc_info=True,
            )
            return False
        return True
