"""Trend bucketer — calendar buckets, per-bucket counts and a coarse slope."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from issuescope.engines.record_fetcher.models import Record, parse_datetime

AnalysisType = Literal["completion", "creation", "update", "progress"]
Period = Literal["week", "month", "quarter", "year"]

ANALYSIS_DATE_FIELDS: dict[str, str] = {
    "completion": "UpdatedTime",
    "creation": "CreatedTime",
    "update": "UpdatedTime",
    "progress": "UpdatedTime",
}

ALL_GROUP = "all"
UNKNOWN_GROUP = "unknown"


@dataclass
class GroupSummary:
    name: str
    count: int
    average_progress: float | None
    completion_rate: float | None


@dataclass
class TimeSeriesPoint:
    period: str
    count: int


@dataclass
class Trend:
    increasing: bool = False
    peak: int = 0
    average: float = 0.0


@dataclass
class TrendAnalysis:
    groups: list[GroupSummary] = field(default_factory=list)
    time_series: list[TimeSeriesPoint] = field(default_factory=list)
    trend: Trend = field(default_factory=Trend)


def date_field_for(analysis_type: str) -> str:
    """Column whose timestamp places a record in a bucket."""
    return ANALYSIS_DATE_FIELDS.get(analysis_type, "CreatedTime")


def bucket_key(moment: datetime, period: str) -> str:
    """Map a timestamp to its bucket key.

    Weeks are ``{year}-W{ceil(day_of_month / 7)}``, a week-of-month scheme
    rather than ISO weeks.  Unknown periods fall back to the calendar day.
    """
    if period == "week":
        return f"{moment.year}-W{math.ceil(moment.day / 7)}"
    if period == "month":
        return f"{moment.year}-{moment.month:02d}"
    if period == "quarter":
        return f"{moment.year}-Q{math.ceil(moment.month / 3)}"
    if period == "year":
        return str(moment.year)
    return moment.date().isoformat()


def calculate_trend(values: Sequence[int]) -> float:
    """Mean of the later half minus mean of the earlier half.

    This is a two-point slope, not a statistical test.  With an odd length
    the extra value goes to the later half.  Fewer than two values give 0.
    """
    if len(values) < 2:
        return 0.0
    mid = len(values) // 2
    first, second = values[:mid], values[mid:]
    return sum(second) / len(second) - sum(first) / len(first)


def summarize_group(name: str, records: Sequence[Record]) -> GroupSummary:
    """Count, average progress and completion rate of one group.

    Rates are None for an empty group.
    """
    count = len(records)
    if count == 0:
        return GroupSummary(name=name, count=0, average_progress=None, completion_rate=None)
    progress = sum(r.progress_rate or 0 for r in records)
    completed = sum(1 for r in records if r.is_completed)
    return GroupSummary(
        name=name,
        count=count,
        average_progress=progress / count,
        completion_rate=completed / count * 100,
    )


def bucket_and_analyze(
    records: Sequence[Record],
    analysis_type: str,
    period: str,
    group_by: str | None = None,
    *,
    date_field: str | None = None,
) -> TrendAnalysis:
    """Bucket *records* by period and derive counts, groups and trend.

    Records whose date column is missing or unparsable are left out of the
    time series.  *group_by* is a raw column name (``Status``, ``ClassA``,
    ``Owner`` …); without it every record lands in a single ``all`` group.
    Never raises.
    """
    column = date_field or date_field_for(analysis_type)

    grouped: dict[str, list[Record]] = {}
    if group_by:
        for record in records:
            key = str(record.get(group_by) or UNKNOWN_GROUP)
            grouped.setdefault(key, []).append(record)
    else:
        grouped[ALL_GROUP] = list(records)

    buckets: Counter[str] = Counter()
    for record in records:
        moment = parse_datetime(record.get(column))
        if moment is None:
            continue
        buckets[bucket_key(moment, period)] += 1

    time_series = [TimeSeriesPoint(period=key, count=buckets[key]) for key in sorted(buckets)]
    counts = [point.count for point in time_series]
    trend = Trend(
        increasing=calculate_trend(counts) > 0,
        peak=max(counts, default=0),
        average=sum(counts) / len(counts) if counts else 0.0,
    )

    return TrendAnalysis(
        groups=[summarize_group(name, members) for name, members in grouped.items()],
        time_series=time_series,
        trend=trend,
    )
