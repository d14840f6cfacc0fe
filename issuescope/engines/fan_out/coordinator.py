"""Fan-out search — one query, many sites, isolated failures."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from issuescope.engines.fan_out.models import FanOutReport, FanOutSummary, SiteSearchResult
from issuescope.engines.query_builder.models import QueryPayload
from issuescope.engines.record_fetcher.fetcher import fetch
from issuescope.engines.record_fetcher.pleasanter_client import PleasanterClient

log = structlog.get_logger("issuescope.engine")

DEFAULT_PER_SITE_LIMIT = 20


async def search_many(
    client: PleasanterClient,
    site_ids: Sequence[int],
    search_text: str,
    per_site_limit: int = DEFAULT_PER_SITE_LIMIT,
) -> FanOutReport:
    """Run the same full-text search against every site concurrently.

    Every call is awaited to completion; a failing site becomes a
    ``success=False`` entry and never affects the others.  The returned
    ``sites`` list follows the order of *site_ids*, not completion order.
    """
    query = QueryPayload(search=search_text, limit=per_site_limit)
    outcomes = await asyncio.gather(
        *(fetch(client, site_id, query) for site_id in site_ids),
        return_exceptions=True,
    )

    sites: list[SiteSearchResult] = []
    for site_id, outcome in zip(site_ids, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            log.error(
                "fan_out.site_failed",
                site_id=site_id,
                error_type=type(outcome).__name__,
                error=str(outcome),
            )
            error = str(outcome) or type(outcome).__name__
            sites.append(SiteSearchResult(site_id=site_id, success=False, error=error))
            continue
        sites.append(SiteSearchResult(site_id=site_id, success=True, results=outcome.records))

    summary = FanOutSummary(
        total_sites=len(site_ids),
        successful_sites=sum(1 for s in sites if s.success),
        total_results=sum(s.count for s in sites),
        sites_with_results=sum(1 for s in sites if s.count > 0),
    )
    log.info(
        "fan_out.completed",
        total_sites=summary.total_sites,
        successful_sites=summary.successful_sites,
        total_results=summary.total_results,
    )
    return FanOutReport(search_term=search_text, sites=sites, summary=summary)
