"""Shared fixtures for issuescope tests. No network access is needed."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from issuescope.engines.record_fetcher import PleasanterClient


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client() -> PleasanterClient:
    """A client whose ``get_items`` is an AsyncMock returning an empty page."""
    c = PleasanterClient.__new__(PleasanterClient)
    c.get_items = AsyncMock(  # type: ignore[method-assign]
        return_value={"StatusCode": 200, "Response": {"Data": [], "TotalCount": 0}}
    )
    return c
