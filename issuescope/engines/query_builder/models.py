"""Data models for the query builder engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds for one column (``YYYY-MM-DD`` strings)."""

    start: str | None = None
    end: str | None = None


@dataclass(frozen=True)
class NumberRange:
    """Inclusive numeric bounds for one column."""

    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class FilterDescription:
    """Everything a caller may ask of the item listing endpoint.

    ``filters`` maps a column to an equality value; alternatives are
    pipe-delimited (``{"Status": "100|200"}``).
    """

    search: str | None = None
    filters: dict[str, str] = field(default_factory=dict)
    date_ranges: dict[str, DateRange] = field(default_factory=dict)
    number_ranges: dict[str, NumberRange] = field(default_factory=dict)
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    offset: int = 0
    limit: int = 100


@dataclass(frozen=True)
class QueryPayload:
    """Immutable, fully assembled query for one ``/items/{site}/get`` call."""

    search: str | None = None
    column_filters: dict[str, str] = field(default_factory=dict)
    column_expressions: dict[str, str] = field(default_factory=dict)
    sorters: dict[str, SortOrder] = field(default_factory=dict)
    offset: int = 0
    limit: int = 100

    def view(self) -> dict[str, Any]:
        """Render the Pleasanter ``View`` object, omitting empty parts."""
        view: dict[str, Any] = {}
        if self.search:
            view["Search"] = self.search
        if self.column_filters:
            view["ColumnFilterHash"] = dict(self.column_filters)
        if self.column_expressions:
            view["ColumnFilterExpressions"] = dict(self.column_expressions)
        if self.sorters:
            view["ColumnSorterHash"] = dict(self.sorters)
        return view

    def to_request(self) -> dict[str, Any]:
        """Render the request body (without API credentials)."""
        request: dict[str, Any] = {"Offset": self.offset, "PageSize": self.limit}
        view = self.view()
        if view:
            request["View"] = view
        return request
