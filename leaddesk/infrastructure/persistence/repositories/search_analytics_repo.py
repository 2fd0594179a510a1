"""Search analytics: append-only log of result selections."""

from __future__ import annotations

from leaddesk.application.dtos.search import SearchClickCreate
from leaddesk.infrastructure.persistence.database import SessionFactory
from leaddesk.infrastructure.persistence.models import SearchAnalytics


class SearchAnalyticsRepository:
    """Writes search_analytics rows (never read back by the service)."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    async def record_click(self, data: SearchClickCreate) -> None:
        async with self.session_factory(transactional=True) as db:
            db.add(
                SearchAnalytics(
                    user_id=data.caller_id,
                    company_id=data.tenant_id,
                    query=data.query,
                    result_type=data.result_type,
                    result_id=data.result_id,
                    results_count=data.results_count,
                    time_to_click_ms=data.time_to_click_ms,
                )
            )
