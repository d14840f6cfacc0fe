"""Tests for the trend bucketer."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from issuescope.engines.record_fetcher import Record
from issuescope.engines.trend import (
    bucket_and_analyze,
    bucket_key,
    calculate_trend,
    date_field_for,
)


def _records(*rows: dict) -> list[Record]:
    return [Record.from_api(row) for row in rows]


class TestBucketKey:
    @pytest.mark.parametrize(
        ("moment", "period", "expected"),
        [
            (datetime(2024, 3, 1), "week", "2024-W1"),
            (datetime(2024, 3, 7), "week", "2024-W1"),
            (datetime(2024, 3, 8), "week", "2024-W2"),
            (datetime(2024, 3, 31), "week", "2024-W5"),
            (datetime(2024, 3, 5), "month", "2024-03"),
            (datetime(2024, 11, 5), "month", "2024-11"),
            (datetime(2024, 3, 31), "quarter", "2024-Q1"),
            (datetime(2024, 4, 1), "quarter", "2024-Q2"),
            (datetime(2024, 12, 31), "quarter", "2024-Q4"),
            (datetime(2024, 6, 15), "year", "2024"),
            (datetime(2024, 6, 15, 13, 0), "fortnight", "2024-06-15"),
        ],
    )
    def test_keys(self, moment, period, expected):
        assert bucket_key(moment, period) == expected


class TestCalculateTrend:
    def test_too_short(self):
        assert calculate_trend([]) == 0.0
        assert calculate_trend([5]) == 0.0

    def test_rising(self):
        assert calculate_trend([1, 2, 3, 4]) == pytest.approx(2.0)

    def test_falling(self):
        assert calculate_trend([4, 3, 2, 1]) < 0

    def test_odd_length_extra_goes_to_later_half(self):
        # first [1], second [1, 4]
        assert calculate_trend([1, 1, 4]) == pytest.approx(1.5)


class TestDateField:
    def test_mapping(self):
        assert date_field_for("creation") == "CreatedTime"
        assert date_field_for("completion") == "UpdatedTime"
        assert date_field_for("update") == "UpdatedTime"
        assert date_field_for("progress") == "UpdatedTime"


class TestBucketAndAnalyze:
    def test_single_month(self):
        records = _records(
            {"CreatedTime": "2024-03-05T00:00:00"},
            {"CreatedTime": "2024-03-20T00:00:00"},
        )
        analysis = bucket_and_analyze(records, "creation", "month")

        assert [(p.period, p.count) for p in analysis.time_series] == [("2024-03", 2)]
        assert analysis.trend.increasing is False
        assert analysis.trend.peak == 2
        assert analysis.trend.average == 2

    def test_series_sorted_regardless_of_input_order(self):
        dates = [
            "2024-01-03T00:00:00",
            "2024-02-11T00:00:00",
            "2024-02-10T00:00:00",
            "2024-04-01T00:00:00",
            "2024-04-02T00:00:00",
            "2024-04-03T00:00:00",
        ]
        rows = [{"UpdatedTime": d} for d in dates]
        expected = bucket_and_analyze(_records(*rows), "update", "month")

        shuffled = rows[:]
        random.Random(7).shuffle(shuffled)
        actual = bucket_and_analyze(_records(*shuffled), "update", "month")

        assert actual.time_series == expected.time_series
        assert [p.period for p in actual.time_series] == ["2024-01", "2024-02", "2024-04"]
        assert [p.count for p in actual.time_series] == [1, 2, 3]
        assert actual.trend.increasing is True
        assert actual.trend.peak == 3

    def test_unparsable_dates_skipped(self):
        records = _records(
            {"CreatedTime": "2024-03-05T00:00:00"},
            {"CreatedTime": "yesterday"},
            {},
        )
        analysis = bucket_and_analyze(records, "creation", "year")

        assert sum(p.count for p in analysis.time_series) == 1
        assert analysis.groups[0].count == 3

    def test_slash_and_fractional_dates_counted(self):
        records = _records(
            {"UpdatedTime": "2024/3/5 10:00:00"},
            {"UpdatedTime": "2024-03-20T08:15:00.1234567"},
        )
        analysis = bucket_and_analyze(records, "update", "month")

        assert [(p.period, p.count) for p in analysis.time_series] == [("2024-03", 2)]

    def test_single_all_group(self):
        records = _records(
            {"CreatedTime": "2024-03-05T00:00:00", "Status": 900, "ProgressRate": 100},
            {"CreatedTime": "2024-03-06T00:00:00", "Status": 100, "ProgressRate": 50},
        )
        analysis = bucket_and_analyze(records, "creation", "week")

        assert len(analysis.groups) == 1
        group = analysis.groups[0]
        assert group.name == "all"
        assert group.count == 2
        assert group.average_progress == pytest.approx(75)
        assert group.completion_rate == pytest.approx(50)

    def test_empty_input(self):
        analysis = bucket_and_analyze([], "creation", "month")

        assert analysis.time_series == []
        assert analysis.trend.increasing is False
        assert analysis.trend.peak == 0
        assert analysis.trend.average == 0
        assert analysis.groups[0].name == "all"
        assert analysis.groups[0].average_progress is None
        assert analysis.groups[0].completion_rate is None

    def test_group_by_raw_column(self):
        records = _records(
            {"UpdatedTime": "2024-03-05T00:00:00", "ClassA": "bug"},
            {"UpdatedTime": "2024-03-06T00:00:00", "ClassA": "bug"},
            {"UpdatedTime": "2024-03-07T00:00:00"},
        )
        analysis = bucket_and_analyze(records, "update", "month", "ClassA")

        by_name = {g.name: g.count for g in analysis.groups}
        assert by_name == {"bug": 2, "unknown": 1}

    def test_explicit_date_field(self):
        records = _records({"CompletionTime": "2023-12-01T00:00:00"})
        analysis = bucket_and_analyze(records, "creation", "year", date_field="CompletionTime")
        assert [p.period for p in analysis.time_series] == ["2023"]
