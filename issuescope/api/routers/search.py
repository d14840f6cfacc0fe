"""Search router — advanced single-site search and multi-site fan-out."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from issuescope.api.deps import get_search_service
from issuescope.api.schemas.search import (
    AdvancedSearchRequest,
    AdvancedSearchResponse,
    MultiSiteSearchRequest,
    MultiSiteSearchResponse,
)
from issuescope.services.search_service import DateFilters, NumberFilters, SearchService

router = APIRouter()


@router.post("/advanced", response_model=AdvancedSearchResponse)
async def advanced_search(
    body: AdvancedSearchRequest,
    svc: SearchService = Depends(get_search_service),
) -> AdvancedSearchResponse:
    result = await svc.advanced_search(
        body.site_id,
        search=body.search,
        filters=body.filters,
        date_filters=DateFilters(**body.date_filters.model_dump()) if body.date_filters else None,
        number_filters=(
            NumberFilters(**body.number_filters.model_dump()) if body.number_filters else None
        ),
        sort_by=body.sort_by,
        sort_order=body.sort_order,
        offset=body.offset,
        limit=body.limit,
    )
    return AdvancedSearchResponse.model_validate(result)


@router.post("/multi-site", response_model=MultiSiteSearchResponse)
async def multi_site_search(
    body: MultiSiteSearchRequest,
    svc: SearchService = Depends(get_search_service),
) -> MultiSiteSearchResponse:
    result = await svc.multi_site_search(body.site_ids, body.search, body.limit)
    return MultiSiteSearchResponse.model_validate(result)
