"""Data models for the record fetcher engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

COMPLETED_STATUS = 900

# .NET emits up to seven fractional digits; fromisoformat takes three or six on 3.10
_FRACTION_RE = re.compile(r"\.(\d+)")
_SLASH_FORMATS = ("%Y/%m/%d %H:%M:%S", "%Y/%m/%d %H:%M", "%Y/%m/%d")


def _normalize_fraction(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_datetime(value: Any) -> datetime | None:
    """Parse a Pleasanter timestamp, returning None on failure.

    Accepts ISO-8601 (``2024-03-05T10:00:00``, optional ``Z`` or offset, any
    number of fractional digits) and the slash-separated form, padded or not
    (``2024/3/5 10:00:00``, ``2024/03/05``).
    """
    if not value or not isinstance(value, str):
        return None
    text = _FRACTION_RE.sub(_normalize_fraction, value.strip().replace("Z", "+00:00"))
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _SLASH_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _number(value: Any) -> float | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


@dataclass(frozen=True)
class Record:
    """One item of a site, as returned by the listing endpoint.

    ``data`` keeps every column verbatim; the properties give typed access to
    the columns the aggregation engines look at.
    """

    data: dict[str, Any]

    @classmethod
    def from_api(cls, row: dict[str, Any]) -> Record:
        return cls(data=dict(row))

    def get(self, column: str, default: Any = None) -> Any:
        return self.data.get(column, default)

    @property
    def id(self) -> int | None:
        return self.data.get("IssueId") or self.data.get("ResultId")

    @property
    def title(self) -> str | None:
        return self.data.get("Title")

    @property
    def status(self) -> int | None:
        return self.data.get("Status")

    @property
    def owner(self) -> int | None:
        return self.data.get("Owner")

    @property
    def manager(self) -> int | None:
        return self.data.get("Manager")

    @property
    def class_a(self) -> str | None:
        return self.data.get("ClassA")

    @property
    def class_b(self) -> str | None:
        return self.data.get("ClassB")

    @property
    def class_c(self) -> str | None:
        return self.data.get("ClassC")

    @property
    def progress_rate(self) -> float | int | None:
        return _number(self.data.get("ProgressRate"))

    @property
    def work_value(self) -> float | int | None:
        return _number(self.data.get("WorkValue"))

    @property
    def created_time(self) -> datetime | None:
        return parse_datetime(self.data.get("CreatedTime"))

    @property
    def updated_time(self) -> datetime | None:
        return parse_datetime(self.data.get("UpdatedTime"))

    @property
    def start_time(self) -> datetime | None:
        return parse_datetime(self.data.get("StartTime"))

    @property
    def completion_time(self) -> datetime | None:
        return parse_datetime(self.data.get("CompletionTime"))

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED_STATUS


@dataclass(frozen=True)
class ApiInfo:
    """Daily quota metadata, passed through from the response unmodified."""

    remaining_calls: int | None = None
    daily_limit: int | None = None


@dataclass
class FetchResult:
    """Outcome of a single listing call against one site."""

    site_id: int
    records: list[Record] = field(default_factory=list)
    total_count: int | None = None
    api_info: ApiInfo = field(default_factory=ApiInfo)
    offset: int = 0
    limit: int = 0

    @property
    def has_more(self) -> bool:
        """Heuristic: a full page suggests more rows; exact multiples lie."""
        return len(self.records) == self.limit
