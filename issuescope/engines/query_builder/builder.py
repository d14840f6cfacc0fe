"""Filter expression builder — structured filters to Pleasanter's filter grammar.

Pleasanter accepts per-column range constraints in ``ColumnFilterExpressions``
as ``>=[Column]>=value`` and ``<=[Column]<=value``.  Both clauses for one
column are concatenated into a single string, lower bound first.

Everything here is pure: no I/O, no validation of column names, no raising.
"""

from __future__ import annotations

from collections.abc import Mapping

from issuescope.engines.query_builder.models import (
    DateRange,
    FilterDescription,
    NumberRange,
    QueryPayload,
    SortOrder,
)

DEFAULT_SORT_ORDER: SortOrder = "desc"


def _format_number(value: float) -> str:
    """Render ``10.0`` as ``10`` and ``12.5`` as ``12.5``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def date_range_expression(column: str, bounds: DateRange) -> str | None:
    """Return the expression for a date range, or None if it has no bounds."""
    expr = ""
    if bounds.start:
        expr += f">=[{column}]>='{bounds.start}'"
    if bounds.end:
        expr += f"<=[{column}]<='{bounds.end}'"
    return expr or None


def number_range_expression(column: str, bounds: NumberRange) -> str | None:
    """Return the expression for a numeric range, or None if it has no bounds."""
    expr = ""
    if bounds.minimum is not None:
        expr += f">=[{column}]>={_format_number(bounds.minimum)}"
    if bounds.maximum is not None:
        expr += f"<=[{column}]<={_format_number(bounds.maximum)}"
    return expr or None


def build_range_expressions(
    date_ranges: Mapping[str, DateRange] | None = None,
    number_ranges: Mapping[str, NumberRange] | None = None,
) -> dict[str, str]:
    """Build ``ColumnFilterExpressions`` from per-column date and number ranges.

    Columns without any bound are left out.  A column present in both maps
    gets the date clauses followed by the number clauses.
    """
    expressions: dict[str, str] = {}
    for column, bounds in (date_ranges or {}).items():
        expr = date_range_expression(column, bounds)
        if expr:
            expressions[column] = expr
    for column, bounds in (number_ranges or {}).items():
        expr = number_range_expression(column, bounds)
        if expr:
            expressions[column] = expressions.get(column, "") + expr
    return expressions


def build_query(description: FilterDescription) -> QueryPayload:
    """Assemble one immutable :class:`QueryPayload` from a filter description.

    Equality filters are passed through unchanged; a column may carry both an
    equality filter and a range expression, and both are sent.
    """
    sorters: dict[str, SortOrder] = {}
    if description.sort_by:
        sorters[description.sort_by] = description.sort_order or DEFAULT_SORT_ORDER

    return QueryPayload(
        search=description.search or None,
        column_filters=dict(description.filters),
        column_expressions=build_range_expressions(
            description.date_ranges, description.number_ranges
        ),
        sorters=sorters,
        offset=description.offset,
        limit=description.limit,
    )
