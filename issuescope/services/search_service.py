"""SearchService — the consumer-facing query and analysis operations."""

from __future__ import annotations

import calendar
import math
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

import structlog

from issuescope.engines.aggregation import aggregate, group_key_selector, overview
from issuescope.engines.aggregation.aggregator import GROUP_KEY_SELECTORS
from issuescope.engines.fan_out import FanOutReport, search_many
from issuescope.engines.query_builder import (
    DateRange,
    FilterDescription,
    NumberRange,
    build_query,
)
from issuescope.engines.record_fetcher import (
    COMPLETED_STATUS,
    FetchResult,
    PleasanterClient,
    Record,
    fetch,
    get_record,
)
from issuescope.engines.trend import ANALYSIS_DATE_FIELDS, bucket_and_analyze, date_field_for
from issuescope.services import NotFoundError, ValidationError

log = structlog.get_logger("issuescope.service")

LIST_DEFAULT_LIMIT = 50
SEARCH_DEFAULT_LIMIT = 100
MAX_LIMIT = 1000
MULTI_SITE_MAX_SITES = 10
MULTI_SITE_DEFAULT_LIMIT = 20
MULTI_SITE_MAX_LIMIT = 100
ANALYSIS_PAGE_SIZE = 1000

PERIODS = ("week", "month", "quarter", "year")
SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class DateFilters:
    """Date bounds on the three timestamp columns advanced search supports."""

    start_date_from: str | None = None
    start_date_to: str | None = None
    completion_date_from: str | None = None
    completion_date_to: str | None = None
    updated_from: str | None = None
    updated_to: str | None = None

    def to_ranges(self) -> dict[str, DateRange]:
        return {
            "StartTime": DateRange(self.start_date_from, self.start_date_to),
            "CompletionTime": DateRange(self.completion_date_from, self.completion_date_to),
            "UpdatedTime": DateRange(self.updated_from, self.updated_to),
        }


@dataclass(frozen=True)
class NumberFilters:
    """Numeric bounds on progress rate (0-100) and work value."""

    progress_rate_min: float | None = None
    progress_rate_max: float | None = None
    work_value_min: float | None = None
    work_value_max: float | None = None

    def to_ranges(self) -> dict[str, NumberRange]:
        return {
            "ProgressRate": NumberRange(self.progress_rate_min, self.progress_rate_max),
            "WorkValue": NumberRange(self.work_value_min, self.work_value_max),
        }


# ── validation helpers ────────────────────────────────────────────────────


def _check_site_id(site_id: Any, name: str = "site_id") -> None:
    if isinstance(site_id, bool) or not isinstance(site_id, int) or site_id <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {site_id!r}")


def _check_limit(limit: int, maximum: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= maximum:
        raise ValidationError(f"limit must be between 1 and {maximum}, got {limit!r}")


def _check_offset(offset: int) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ValidationError(f"offset must be a non-negative integer, got {offset!r}")


def _check_sort_order(sort_order: str | None) -> None:
    if sort_order is not None and sort_order not in SORT_ORDERS:
        raise ValidationError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")


def _check_choice(value: str, choices: Sequence[str], name: str) -> None:
    if value not in choices:
        raise ValidationError(f"{name} must be one of {', '.join(choices)}; got {value!r}")


def _check_progress_bounds(number_filters: NumberFilters) -> None:
    for bound in (number_filters.progress_rate_min, number_filters.progress_rate_max):
        if bound is not None and not 0 <= bound <= 100:
            raise ValidationError(f"progress rate bounds must be within 0-100, got {bound!r}")


# ── result shaping ────────────────────────────────────────────────────────


def _api_info(result: FetchResult) -> dict[str, int | None]:
    return asdict(result.api_info)


def _pagination(result: FetchResult) -> dict[str, Any]:
    return {"offset": result.offset, "limit": result.limit, "has_more": result.has_more}


def _rows(records: Sequence[Record]) -> list[dict[str, Any]]:
    return [record.data for record in records]


def _finite_or_none(value: float) -> float | None:
    return None if math.isnan(value) else value


def _fan_out_dict(report: FanOutReport) -> dict[str, Any]:
    return {
        "search_term": report.search_term,
        "sites": [
            {
                "site_id": site.site_id,
                "success": site.success,
                "results": _rows(site.results),
                "count": site.count,
                "error": site.error,
            }
            for site in report.sites
        ],
        "summary": asdict(report.summary),
    }


def months_before(day: date, months: int) -> date:
    """Same day *months* earlier, clamped to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def window_start(today: date, period: str) -> date:
    """First day of the analysis window ending *today*."""
    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        return months_before(today, 1)
    if period == "quarter":
        return months_before(today, 3)
    return months_before(today, 12)


class SearchService:
    """Stateless service composing the query, fetch and analysis engines."""

    def __init__(
        self,
        client: PleasanterClient,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._now = now or (lambda: datetime.now(timezone.utc))

    async def list_issues(
        self,
        site_id: int,
        *,
        search: str | None = None,
        status: str | None = None,
        assignee: int | None = None,
        manager: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        offset: int = 0,
        limit: int = LIST_DEFAULT_LIMIT,
    ) -> dict:
        """Simple listing with status / assignee / manager equality filters."""
        _check_site_id(site_id)
        _check_offset(offset)
        _check_limit(limit, MAX_LIMIT)
        _check_sort_order(sort_order)

        filters: dict[str, str] = {}
        if status:
            filters["Status"] = status
        if assignee:
            filters["Owner"] = str(assignee)
        if manager:
            filters["Manager"] = str(manager)

        query = build_query(
            FilterDescription(
                search=search,
                filters=filters,
                sort_by=sort_by,
                sort_order=sort_order,  # type: ignore[arg-type]
                offset=offset,
                limit=limit,
            )
        )
        result = await fetch(self._client, site_id, query)
        return {
            "issues": _rows(result.records),
            "total_count": result.total_count,
            "pagination": _pagination(result),
            "api_info": _api_info(result),
        }

    async def get_issue(self, site_id: int, issue_id: int) -> dict[str, Any]:
        """Return one record's columns.

        Raises :class:`NotFoundError` if the site has no such record.
        """
        _check_site_id(site_id)
        _check_site_id(issue_id, "issue_id")
        record = await get_record(self._client, site_id, issue_id)
        if record is None:
            raise NotFoundError(f"issue {issue_id} not found in site {site_id}")
        return record.data

    async def advanced_search(
        self,
        site_id: int,
        *,
        search: str | None = None,
        filters: dict[str, str] | None = None,
        date_filters: DateFilters | None = None,
        number_filters: NumberFilters | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        offset: int = 0,
        limit: int = SEARCH_DEFAULT_LIMIT,
    ) -> dict:
        """Search with equality filters, date/number ranges, sort and paging."""
        _check_site_id(site_id)
        _check_offset(offset)
        _check_limit(limit, MAX_LIMIT)
        _check_sort_order(sort_order)
        if number_filters is not None:
            _check_progress_bounds(number_filters)

        query = build_query(
            FilterDescription(
                search=search,
                filters=dict(filters or {}),
                date_ranges=date_filters.to_ranges() if date_filters else {},
                number_ranges=number_filters.to_ranges() if number_filters else {},
                sort_by=sort_by,
                sort_order=sort_order,  # type: ignore[arg-type]
                offset=offset,
                limit=limit,
            )
        )
        result = await fetch(self._client, site_id, query)
        log.info(
            "search.advanced",
            site_id=site_id,
            returned=len(result.records),
            expressions=sorted(query.column_expressions),
        )
        return {
            "results": _rows(result.records),
            "total_count": result.total_count,
            "search_conditions": {
                "search": search,
                "filters": filters,
                "date_filters": asdict(date_filters) if date_filters else None,
                "number_filters": asdict(number_filters) if number_filters else None,
            },
            "pagination": _pagination(result),
            "api_info": _api_info(result),
        }

    async def multi_site_search(
        self,
        site_ids: Sequence[int],
        search: str,
        limit: int = MULTI_SITE_DEFAULT_LIMIT,
    ) -> dict:
        """Full-text search across up to ten sites; per-site failures are reported."""
        if not 1 <= len(site_ids) <= MULTI_SITE_MAX_SITES:
            raise ValidationError(
                f"site_ids must contain 1 to {MULTI_SITE_MAX_SITES} ids, got {len(site_ids)}"
            )
        for site_id in site_ids:
            _check_site_id(site_id, "site_ids")
        if not search:
            raise ValidationError("search must not be empty")
        _check_limit(limit, MULTI_SITE_MAX_LIMIT)

        report = await search_many(self._client, list(site_ids), search, limit)
        return _fan_out_dict(report)

    async def trend_analysis(
        self,
        site_id: int,
        analysis_type: str,
        period: str,
        group_by: str | None = None,
    ) -> dict:
        """Count records per calendar bucket over a window ending today.

        ``completion`` narrows to status 900; ``creation`` windows on
        ``CreatedTime``, everything else on ``UpdatedTime``.
        """
        _check_site_id(site_id)
        _check_choice(analysis_type, tuple(ANALYSIS_DATE_FIELDS), "analysis_type")
        _check_choice(period, PERIODS, "period")

        today = self._now().date()
        start = window_start(today, period).isoformat()
        column = date_field_for(analysis_type)

        filters = {"Status": str(COMPLETED_STATUS)} if analysis_type == "completion" else {}
        query = build_query(
            FilterDescription(
                filters=filters,
                date_ranges={column: DateRange(start=start)},
                sort_by=group_by,
                sort_order="asc",
                limit=ANALYSIS_PAGE_SIZE,
            )
        )
        result = await fetch(self._client, site_id, query)
        analysis = bucket_and_analyze(result.records, analysis_type, period, group_by)

        return {
            "analysis_type": analysis_type,
            "period": period,
            "date_range": {"from": start, "to": today.isoformat()},
            "total_issues": len(result.records),
            "analysis": {
                "groups": [asdict(g) for g in analysis.groups],
                "time_series": [asdict(p) for p in analysis.time_series],
                "trends": asdict(analysis.trend),
            },
        }

    async def status_summary(self, site_id: int, group_by: str = "status") -> dict:
        """Per-group counts, work value, progress and completion for one site."""
        _check_site_id(site_id)
        _check_choice(group_by, tuple(GROUP_KEY_SELECTORS), "group_by")

        query = build_query(FilterDescription(limit=ANALYSIS_PAGE_SIZE))
        result = await fetch(self._client, site_id, query)
        groups = aggregate(result.records, group_key_selector(group_by))
        totals = overview(result.records, groups)

        return {
            "group_by": group_by,
            "total_issues": len(result.records),
            "group_count": len(groups),
            "summary": {key: asdict(stats) for key, stats in groups.items()},
            "overview": {
                "total_completed": totals.total_completed,
                "overall_completion_rate": _finite_or_none(totals.overall_completion_rate),
                "total_work_value": totals.total_work_value,
            },
        }
