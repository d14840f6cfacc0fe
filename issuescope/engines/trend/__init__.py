"""Trend engine — calendar-bucketed time series over fetched records."""

from issuescope.engines.trend.bucketer import (
    ANALYSIS_DATE_FIELDS,
    AnalysisType,
    GroupSummary,
    Period,
    TimeSeriesPoint,
    Trend,
    TrendAnalysis,
    bucket_and_analyze,
    bucket_key,
    calculate_trend,
    date_field_for,
    summarize_group,
)

__all__ = [
    "ANALYSIS_DATE_FIELDS",
    "AnalysisType",
    "GroupSummary",
    "Period",
    "TimeSeriesPoint",
    "Trend",
    "TrendAnalysis",
    "bucket_and_analyze",
    "bucket_key",
    "calculate_trend",
    "date_field_for",
    "summarize_group",
]
