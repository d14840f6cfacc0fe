"""Tests for the aggregation engine."""

from __future__ import annotations

import math

import pytest

from issuescope.engines.aggregation import aggregate, group_key_selector, overview
from issuescope.engines.record_fetcher import Record


def _records(*rows: dict) -> list[Record]:
    return [Record.from_api(row) for row in rows]


class TestAggregate:
    def test_status_grouping(self):
        records = _records(
            {"IssueId": 1, "Status": 900, "WorkValue": 5},
            {"IssueId": 2, "Status": 100, "WorkValue": 3},
        )
        groups = aggregate(records, group_key_selector("status"))

        assert set(groups) == {"900", "100"}
        assert groups["900"].count == 1
        assert groups["900"].completed_count == 1
        assert groups["900"].completion_rate == 100
        assert groups["100"].completed_count == 0
        assert groups["100"].completion_rate == 0

        totals = overview(records, groups)
        assert totals.total_completed == 1
        assert totals.overall_completion_rate == 50
        assert totals.total_work_value == 8

    def test_counts_partition_records(self):
        records = _records(
            *({"IssueId": i, "Status": s} for i, s in enumerate([100, 100, 200, 900, None, 300, 900]))
        )
        groups = aggregate(records, group_key_selector("status"))
        assert sum(g.count for g in groups.values()) == len(records)

    @pytest.mark.parametrize(
        ("group_by", "row", "expected"),
        [
            ("status", {}, "unknown"),
            ("assignee", {}, "unassigned"),
            ("assignee", {"Owner": 4}, "4"),
            ("manager", {}, "unassigned"),
            ("classA", {"ClassA": ""}, "uncategorized"),
            ("classA", {"ClassA": "bug"}, "bug"),
            ("classB", {}, "uncategorized"),
        ],
    )
    def test_missing_values_get_sentinel(self, group_by, row, expected):
        groups = aggregate(_records(row), group_key_selector(group_by))
        assert list(groups) == [expected]

    def test_unrecognised_group_by(self):
        groups = aggregate(_records({"Status": 100}, {"Status": 200}), group_key_selector("nope"))
        assert list(groups) == ["unknown"]
        assert groups["unknown"].count == 2

    def test_missing_progress_counts_as_zero(self):
        records = _records(
            {"Status": 100, "ProgressRate": 80},
            {"Status": 100, "ProgressRate": 40},
            {"Status": 100},
        )
        groups = aggregate(records, group_key_selector("status"))
        assert groups["100"].average_progress == pytest.approx(40)

    def test_record_summaries(self):
        records = _records({"IssueId": 7, "Title": "crash", "Status": 200, "ProgressRate": 10})
        groups = aggregate(records, group_key_selector("status"))
        assert groups["200"].records == [
            {"id": 7, "title": "crash", "status": 200, "progress": 10}
        ]

    def test_completion_rate_bounds(self):
        rows = [{"Status": 900 if i % 3 == 0 else 100, "Owner": i % 2} for i in range(20)]
        groups = aggregate(_records(*rows), group_key_selector("assignee"))
        for stats in groups.values():
            assert 0 <= stats.completion_rate <= 100
            assert stats.completed_count <= stats.count

    def test_empty_input(self):
        groups = aggregate([], group_key_selector("status"))
        assert groups == {}

        totals = overview([], groups)
        assert totals.total_completed == 0
        assert totals.total_work_value == 0
        assert math.isnan(totals.overall_completion_rate)
