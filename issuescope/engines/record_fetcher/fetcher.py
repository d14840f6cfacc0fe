"""Record fetcher — one listing call per site, no retries, no error handling."""

from __future__ import annotations

import structlog

from issuescope.engines.query_builder.models import QueryPayload
from issuescope.engines.record_fetcher.models import ApiInfo, FetchResult, Record
from issuescope.engines.record_fetcher.pleasanter_client import PleasanterClient

log = structlog.get_logger("issuescope.engine")


async def fetch(client: PleasanterClient, site_id: int, query: QueryPayload) -> FetchResult:
    """Run *query* against one site and return its records.

    Any :class:`~issuescope.engines.record_fetcher.pleasanter_client.FetchError`
    raised by the client propagates unchanged.
    """
    response = await client.get_items(site_id, query.to_request())

    body = response.get("Response") or {}
    rows = body.get("Data") or []
    records = [Record.from_api(row) for row in rows if isinstance(row, dict)]

    log.debug(
        "fetcher.fetched",
        site_id=site_id,
        count=len(records),
        offset=query.offset,
        limit=query.limit,
    )
    return FetchResult(
        site_id=site_id,
        records=records,
        total_count=body.get("TotalCount"),
        api_info=ApiInfo(
            remaining_calls=response.get("LimitRemaining"),
            daily_limit=response.get("LimitPerDate"),
        ),
        offset=query.offset,
        limit=query.limit,
    )


async def get_record(client: PleasanterClient, site_id: int, record_id: int) -> Record | None:
    """Fetch a single record by id, or None if the site has no such record."""
    query = QueryPayload(column_filters={"IssueId": str(record_id)}, limit=1)
    result = await fetch(client, site_id, query)
    return result.records[0] if result.records else None
