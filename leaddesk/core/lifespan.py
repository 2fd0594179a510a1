"""Application lifespan: startup and shutdown.

Wiring only: search history recorder, telemetry, DB engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from leaddesk.core.config import get_settings
from leaddesk.infrastructure.persistence import database
from leaddesk.infrastructure.persistence.repositories import RecentSearchRepository
from leaddesk.infrastructure.services import SearchHistoryRecorder
from leaddesk.shared.telemetry.telemetry import (
    SearchTelemetry,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: recent-search recorder, telemetry (if enabled).
    Shutdown: drain pending recent-search writes, telemetry shutdown,
    SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.search_history_recorder = SearchHistoryRecorder(
        RecentSearchRepository(
            database.get_session_factory(),
            retention=settings.recent_search_retention,
        )
    )

    telemetry = SearchTelemetry.from_settings(settings)
    if telemetry is not None:
        set_telemetry(telemetry)
        database.ensure_engine()
        telemetry.instrument(app, database.engine)

    yield

    # ---- Shutdown ----
    recorder = getattr(app.state, "search_history_recorder", None)
    if recorder is not None:
        await recorder.aclose()
        app.state.search_history_recorder = None
        logger.info("Search history recorder drained")

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
