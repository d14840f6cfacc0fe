"""Aggregation engine — grouped statistics over fetched records."""

from issuescope.engines.aggregation.aggregator import (
    GROUP_KEY_SELECTORS,
    GroupBy,
    GroupStats,
    KeySelector,
    Overview,
    aggregate,
    group_key_selector,
    overview,
)

__all__ = [
    "GROUP_KEY_SELECTORS",
    "GroupBy",
    "GroupStats",
    "KeySelector",
    "Overview",
    "aggregate",
    "group_key_selector",
    "overview",
]
