"""Global search dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from leaddesk.application.search import NavigationSource, SettingsSource, default_sources
from leaddesk.application.use_cases import (
    GlobalSearchService,
    RecentSearchService,
    SearchClickService,
)
from leaddesk.core.config import get_settings
from leaddesk.infrastructure.persistence.database import SessionFactory, get_session_factory
from leaddesk.infrastructure.persistence.repositories import (
    RecentSearchRepository,
    SearchAnalyticsRepository,
    SearchRepository,
)
from leaddesk.infrastructure.services import SearchHistoryRecorder


async def get_search_repo(
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
) -> SearchRepository:
    """Search repository; each source query opens its own session."""
    return SearchRepository(session_factory)


async def get_recent_search_repo(
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
) -> RecentSearchRepository:
    return RecentSearchRepository(
        session_factory, retention=get_settings().recent_search_retention
    )


async def get_search_analytics_repo(
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
) -> SearchAnalyticsRepository:
    return SearchAnalyticsRepository(session_factory)


async def get_history_recorder(request: Request) -> SearchHistoryRecorder | None:
    """Recorder created in lifespan (app.state.search_history_recorder), if any."""
    return getattr(request.app.state, "search_history_recorder", None)


async def get_global_search_service(
    search_repo: Annotated[SearchRepository, Depends(get_search_repo)],
    recorder: Annotated[SearchHistoryRecorder | None, Depends(get_history_recorder)],
) -> GlobalSearchService:
    """Aggregator over the four data sources and the two static catalogues."""
    settings = get_settings()
    return GlobalSearchService(
        sources=default_sources(search_repo),
        catalogues=[SettingsSource(), NavigationSource()],
        history_recorder=recorder.record if recorder is not None else None,
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
        min_query_length=settings.search_min_query_length,
    )


async def get_recent_search_service(
    recent_repo: Annotated[RecentSearchRepository, Depends(get_recent_search_repo)],
) -> RecentSearchService:
    settings = get_settings()
    return RecentSearchService(
        recent_repo,
        default_limit=settings.recent_search_display_limit,
        max_limit=settings.recent_search_retention,
    )


async def get_search_click_service(
    analytics_repo: Annotated[
        SearchAnalyticsRepository, Depends(get_search_analytics_repo)
    ],
) -> SearchClickService:
    return SearchClickService(analytics_repo)
