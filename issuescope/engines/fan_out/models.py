"""Data models for the fan-out search engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from issuescope.engines.record_fetcher.models import Record


@dataclass
class SiteSearchResult:
    """Outcome of the search against one site; failures carry ``error``."""

    site_id: int
    success: bool
    results: list[Record] = field(default_factory=list)
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.results)


@dataclass
class FanOutSummary:
    total_sites: int = 0
    successful_sites: int = 0
    total_results: int = 0
    sites_with_results: int = 0


@dataclass
class FanOutReport:
    """Merged result of one search dispatched to several sites.

    ``sites`` is index-aligned with the site ids the caller passed in.
    """

    search_term: str
    sites: list[SiteSearchResult] = field(default_factory=list)
    summary: FanOutSummary = field(default_factory=FanOutSummary)
