"""Trend analysis and status summary schemas."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from issuescope.api.schemas.search import CamelModel

AnalysisTypeIn = Literal["completion", "creation", "update", "progress"]
PeriodIn = Literal["week", "month", "quarter", "year"]
GroupByIn = Literal["status", "assignee", "manager", "classA", "classB"]


class TrendAnalysisRequest(CamelModel):
    site_id: int = Field(gt=0)
    analysis_type: AnalysisTypeIn
    period: PeriodIn
    group_by: str | None = None


class DateWindow(CamelModel):
    from_: str = Field(alias="from")
    to: str


class GroupSummaryOut(CamelModel):
    name: str
    count: int
    average_progress: float | None
    completion_rate: float | None


class TimeSeriesPointOut(CamelModel):
    period: str
    count: int


class TrendOut(CamelModel):
    increasing: bool
    peak: int
    average: float


class TrendBody(CamelModel):
    groups: list[GroupSummaryOut]
    time_series: list[TimeSeriesPointOut]
    trends: TrendOut


class TrendAnalysisResponse(CamelModel):
    analysis_type: str
    period: str
    date_range: DateWindow
    total_issues: int
    analysis: TrendBody


class GroupStatsOut(CamelModel):
    count: int
    total_work_value: float
    average_progress: float
    completed_count: int
    completion_rate: float | None
    records: list[dict[str, Any]]


class OverviewOut(CamelModel):
    total_completed: int
    overall_completion_rate: float | None
    total_work_value: float


class StatusSummaryResponse(CamelModel):
    group_by: str
    total_issues: int
    group_count: int
    summary: dict[str, GroupStatsOut]
    overview: OverviewOut
