"""Dependency injection — the shared Pleasanter client and services."""

from __future__ import annotations

from fastapi import Depends

from issuescope.core.config import PleasanterSettings, load_settings
from issuescope.engines.record_fetcher import PleasanterClient
from issuescope.services.search_service import SearchService

# ---------------------------------------------------------------------------
# Client (initialised by app lifespan)
# ---------------------------------------------------------------------------
_client: PleasanterClient | None = None


def init_client(settings: PleasanterSettings | None = None) -> PleasanterClient:
    """Create the shared Pleasanter client. Called once at startup."""
    global _client  # noqa: PLW0603
    _client = PleasanterClient.from_settings(settings or load_settings())
    return _client


async def close_client() -> None:
    """Close the shared client. Called once at shutdown."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.close()
        _client = None


def get_client() -> PleasanterClient:
    if _client is None:
        raise RuntimeError("Pleasanter client not initialised — call init_client() first")
    return _client


def get_search_service(client: PleasanterClient = Depends(get_client)) -> SearchService:
    return SearchService(client)
