"""Liveness (no dependencies) and readiness (search database reachable)."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from leaddesk.core.config import get_settings
from leaddesk.domain.exceptions import LeadDeskException
from leaddesk.infrastructure.persistence.database import session_scope
from leaddesk.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database missing or unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """200 once the search database answers a trivial query; 503 otherwise."""
    try:
        async with session_scope() as session:
            await session.execute(text("SELECT 1"))
    except LeadDeskException as e:
        message = e.message
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        message = "Database unreachable"
    else:
        return ReadinessResponse()
    return JSONResponse(
        status_code=503, content=ReadinessErrorResponse(message=message).model_dump()
    )
