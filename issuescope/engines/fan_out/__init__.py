"""Fan-out engine — concurrent multi-site search with per-site isolation."""

from issuescope.engines.fan_out.coordinator import DEFAULT_PER_SITE_LIMIT, search_many
from issuescope.engines.fan_out.models import FanOutReport, FanOutSummary, SiteSearchResult

__all__ = [
    "DEFAULT_PER_SITE_LIMIT",
    "FanOutReport",
    "FanOutSummary",
    "SiteSearchResult",
    "search_many",
]
