"""Aggregation engine — per-group counts, work, progress and completion.

Averages divide by the full group size: a record without a
progress rate counts as 0 and stays in the denominator.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from issuescope.engines.record_fetcher.models import Record

GroupBy = Literal["status", "assignee", "manager", "classA", "classB"]
KeySelector = Callable[[Record], str]

UNKNOWN = "unknown"
UNASSIGNED = "unassigned"
UNCATEGORIZED = "uncategorized"


def _status_key(record: Record) -> str:
    return str(record.status) if record.status is not None else UNKNOWN


def _owner_key(record: Record) -> str:
    return str(record.owner) if record.owner is not None else UNASSIGNED


def _manager_key(record: Record) -> str:
    return str(record.manager) if record.manager is not None else UNASSIGNED


def _class_a_key(record: Record) -> str:
    return record.class_a or UNCATEGORIZED


def _class_b_key(record: Record) -> str:
    return record.class_b or UNCATEGORIZED


GROUP_KEY_SELECTORS: dict[str, KeySelector] = {
    "status": _status_key,
    "assignee": _owner_key,
    "manager": _manager_key,
    "classA": _class_a_key,
    "classB": _class_b_key,
}


def group_key_selector(group_by: str) -> KeySelector:
    """Return the key selector for *group_by*; unknown names put everything in ``unknown``."""
    return GROUP_KEY_SELECTORS.get(group_by, lambda _record: UNKNOWN)


@dataclass
class GroupStats:
    count: int = 0
    total_work_value: float = 0
    average_progress: float = 0
    completed_count: int = 0
    completion_rate: float | None = None
    records: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Overview:
    total_completed: int
    overall_completion_rate: float  # NaN when there are no records
    total_work_value: float


def aggregate(records: Iterable[Record], key_selector: KeySelector) -> dict[str, GroupStats]:
    """Partition *records* by *key_selector* and compute :class:`GroupStats` per group."""
    groups: dict[str, GroupStats] = {}
    progress_totals: dict[str, float] = {}

    for record in records:
        key = key_selector(record)
        stats = groups.setdefault(key, GroupStats())
        stats.count += 1
        stats.total_work_value += record.work_value or 0
        progress_totals[key] = progress_totals.get(key, 0) + (record.progress_rate or 0)
        if record.is_completed:
            stats.completed_count += 1
        stats.records.append(
            {
                "id": record.id,
                "title": record.title,
                "status": record.status,
                "progress": record.progress_rate,
            }
        )

    for key, stats in groups.items():
        if stats.count > 0:
            stats.average_progress = progress_totals[key] / stats.count
            stats.completion_rate = stats.completed_count / stats.count * 100
    return groups


def overview(records: Sequence[Record], groups: dict[str, GroupStats]) -> Overview:
    """Totals across all groups.

    ``overall_completion_rate`` is NaN for an empty record set; callers that
    serialize it must handle that case.
    """
    total_completed = sum(g.completed_count for g in groups.values())
    rate = total_completed / len(records) * 100 if records else math.nan
    return Overview(
        total_completed=total_completed,
        overall_completion_rate=rate,
        total_work_value=sum(r.work_value or 0 for r in records),
    )
