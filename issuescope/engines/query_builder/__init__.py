"""Query builder engine — filter descriptions to Pleasanter view payloads."""

from issuescope.engines.query_builder.builder import (
    build_query,
    build_range_expressions,
    date_range_expression,
    number_range_expression,
)
from issuescope.engines.query_builder.models import (
    DateRange,
    FilterDescription,
    NumberRange,
    QueryPayload,
    SortOrder,
)

__all__ = [
    "DateRange",
    "FilterDescription",
    "NumberRange",
    "QueryPayload",
    "SortOrder",
    "build_query",
    "build_range_expressions",
    "date_range_expression",
    "number_range_expression",
]
