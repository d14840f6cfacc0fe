"""Search and listing request/response schemas (camelCase on the wire)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateFiltersIn(CamelModel):
    start_date_from: str | None = None
    start_date_to: str | None = None
    completion_date_from: str | None = None
    completion_date_to: str | None = None
    updated_from: str | None = None
    updated_to: str | None = None


class NumberFiltersIn(CamelModel):
    progress_rate_min: float | None = Field(None, ge=0, le=100)
    progress_rate_max: float | None = Field(None, ge=0, le=100)
    work_value_min: float | None = None
    work_value_max: float | None = None


class AdvancedSearchRequest(CamelModel):
    site_id: int = Field(gt=0)
    search: str | None = None
    filters: dict[str, str] | None = None
    date_filters: DateFiltersIn | None = None
    number_filters: NumberFiltersIn | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None
    limit: int = Field(100, ge=1, le=1000)
    offset: int = Field(0, ge=0)


class MultiSiteSearchRequest(CamelModel):
    site_ids: list[int] = Field(min_length=1, max_length=10)
    search: str = Field(min_length=1)
    limit: int = Field(20, ge=1, le=100)


class Pagination(CamelModel):
    offset: int
    limit: int
    has_more: bool


class ApiInfo(CamelModel):
    remaining_calls: int | None = None
    daily_limit: int | None = None


class IssueListResponse(CamelModel):
    issues: list[dict[str, Any]]
    total_count: int | None = None
    pagination: Pagination
    api_info: ApiInfo


class SearchConditions(CamelModel):
    search: str | None = None
    filters: dict[str, str] | None = None
    date_filters: DateFiltersIn | None = None
    number_filters: NumberFiltersIn | None = None


class AdvancedSearchResponse(CamelModel):
    results: list[dict[str, Any]]
    total_count: int | None = None
    search_conditions: SearchConditions
    pagination: Pagination
    api_info: ApiInfo


class SiteResult(CamelModel):
    site_id: int
    success: bool
    results: list[dict[str, Any]]
    count: int
    error: str | None = None


class MultiSiteSummary(CamelModel):
    total_sites: int
    successful_sites: int
    total_results: int
    sites_with_results: int


class MultiSiteSearchResponse(CamelModel):
    search_term: str
    sites: list[SiteResult]
    summary: MultiSiteSummary
