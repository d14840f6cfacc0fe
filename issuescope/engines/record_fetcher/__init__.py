"""Record fetcher engine — Pleasanter transport and per-site listing."""

from issuescope.engines.record_fetcher.fetcher import fetch, get_record
from issuescope.engines.record_fetcher.models import (
    COMPLETED_STATUS,
    ApiInfo,
    FetchResult,
    Record,
    parse_datetime,
)
from issuescope.engines.record_fetcher.pleasanter_client import (
    FetchError,
    PleasanterClient,
    RateLimitError,
    RemoteApiError,
    RetryPolicy,
    TransportError,
)

__all__ = [
    "COMPLETED_STATUS",
    "ApiInfo",
    "FetchError",
    "FetchResult",
    "PleasanterClient",
    "RateLimitError",
    "Record",
    "RemoteApiError",
    "RetryPolicy",
    "TransportError",
    "fetch",
    "get_record",
    "parse_datetime",
]
