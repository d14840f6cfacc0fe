"""Analysis router — trend analysis and status summaries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from issuescope.api.deps import get_search_service
from issuescope.api.schemas.analysis import (
    GroupByIn,
    StatusSummaryResponse,
    TrendAnalysisRequest,
    TrendAnalysisResponse,
)
from issuescope.services.search_service import SearchService

router = APIRouter()


@router.post("/trend", response_model=TrendAnalysisResponse)
async def trend_analysis(
    body: TrendAnalysisRequest,
    svc: SearchService = Depends(get_search_service),
) -> TrendAnalysisResponse:
    result = await svc.trend_analysis(
        body.site_id, body.analysis_type, body.period, group_by=body.group_by
    )
    return TrendAnalysisResponse.model_validate(result)


@router.get("/status-summary/{site_id}", response_model=StatusSummaryResponse)
async def status_summary(
    site_id: int,
    group_by: GroupByIn = Query("status", alias="groupBy"),
    svc: SearchService = Depends(get_search_service),
) -> StatusSummaryResponse:
    result = await svc.status_summary(site_id, group_by=group_by)
    return StatusSummaryResponse.model_validate(result)
