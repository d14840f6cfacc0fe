"""Issues router — simple per-site listing and single-issue lookup."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query

from issuescope.api.deps import get_search_service
from issuescope.api.schemas.search import IssueListResponse
from issuescope.services.search_service import SearchService

router = APIRouter()


@router.get("/{site_id}/issues", response_model=IssueListResponse)
async def list_issues(
    site_id: int,
    search: str | None = Query(None),
    status: str | None = Query(None, description='e.g. "100" or "100|200"'),
    assignee: int | None = Query(None),
    manager: int | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: Literal["asc", "desc"] | None = Query(None, alias="sortOrder"),
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=1000),
    svc: SearchService = Depends(get_search_service),
) -> IssueListResponse:
    result = await svc.list_issues(
        site_id,
        search=search,
        status=status,
        assignee=assignee,
        manager=manager,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=offset,
        limit=limit,
    )
    return IssueListResponse.model_validate(result)


@router.get("/{site_id}/issues/{issue_id}")
async def get_issue(
    site_id: int,
    issue_id: int,
    svc: SearchService = Depends(get_search_service),
) -> dict[str, Any]:
    return await svc.get_issue(site_id, issue_id)
