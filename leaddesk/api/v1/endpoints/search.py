"""Global search API: aggregated search, recent searches, click analytics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from leaddesk.api.v1.dependencies import (
    get_caller_context,
    get_global_search_service,
    get_recent_search_service,
    get_search_click_service,
)
from leaddesk.application.dtos.user import CallerContext
from leaddesk.application.use_cases import (
    GlobalSearchService,
    RecentSearchService,
    SearchClickService,
)
from leaddesk.core.limiter import limit_search
from leaddesk.schemas.search import (
    RecentSearchResponse,
    SearchClickAcceptedResponse,
    SearchClickRequest,
    SearchRequest,
    SearchResponse,
)

router = APIRouter()


@router.post("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    body: SearchRequest,
    caller: Annotated[CallerContext, Depends(get_caller_context)],
    search_svc: Annotated[GlobalSearchService, Depends(get_global_search_service)],
):
    """Search leads, staff, agents, calls, settings and pages in one request.

    Queries shorter than 2 characters return an empty result (200).
    `results` is capped at `limit`; `categories` and `totalCount` cover all matches.
    """
    result = await search_svc.aggregate(
        body.query, caller, filters=body.filters, limit=body.limit
    )
    return SearchResponse.from_result(result)


@router.get("/recent", response_model=list[RecentSearchResponse])
async def list_recent_searches(
    caller: Annotated[CallerContext, Depends(get_caller_context)],
    recent_svc: Annotated[RecentSearchService, Depends(get_recent_search_service)],
    limit: int = Query(5, ge=1, le=10),
):
    """Caller's most recent distinct queries, newest first."""
    items = await recent_svc.list_recent(caller, limit)
    return [RecentSearchResponse.from_result(i) for i in items]


@router.post("/clicks", response_model=SearchClickAcceptedResponse, status_code=202)
async def record_search_click(
    body: SearchClickRequest,
    caller: Annotated[CallerContext, Depends(get_caller_context)],
    click_svc: Annotated[SearchClickService, Depends(get_search_click_service)],
):
    """Record which result the caller selected. Best-effort: always 202 once validated."""
    await click_svc.record_click(
        caller,
        query=body.query,
        result_type=body.result_type,
        result_id=body.result_id,
        results_count=body.results_count,
        time_to_click_ms=body.time_to_click_ms,
    )
    return SearchClickAcceptedResponse()
