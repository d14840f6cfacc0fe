"""Async Pleasanter API client with credential injection and rate-limit retries."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from issuescope.core.config import PleasanterSettings

log = structlog.get_logger("issuescope.engine")

API_VERSION = 1.0
_USER_AGENT = "IssueScope/1.0.0"


class FetchError(Exception):
    """Base class for every failed call to the Pleasanter API."""


class TransportError(FetchError):
    """Network, timeout or connection failure; no usable response arrived."""


class RemoteApiError(FetchError):
    """Pleasanter answered with a structured failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(RemoteApiError):
    """Raised when HTTP 429 persists after the retry budget is spent."""


@dataclass(frozen=True)
class RetryPolicy:
    """Rate-limit retry budget, applied per call.

    Each 429 response costs one retry and waits ``delay`` seconds.  The
    counter lives in the call frame, so concurrent requests never share it.
    """

    retries: int = 3
    delay: float = 1.0


class PleasanterClient:
    """Thin async wrapper around the Pleasanter JSON API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._retry_policy = retry_policy or RetryPolicy()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Content-Type": "application/json",
                "User-Agent": _USER_AGENT,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: PleasanterSettings) -> PleasanterClient:
        return cls(
            settings.base_url,
            settings.api_key,
            timeout=settings.timeout,
            retry_policy=RetryPolicy(retries=settings.retries, delay=settings.retry_delay),
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PleasanterClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def post(
        self,
        endpoint: str,
        data: dict[str, Any] | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> dict[str, Any]:
        """POST *data* to *endpoint* with ``ApiVersion`` and ``ApiKey`` attached.

        Returns the decoded JSON body.  Raises :class:`TransportError` when no
        response arrives and :class:`RemoteApiError` when Pleasanter reports a
        failure, either via the HTTP status or a ``StatusCode >= 400`` body.
        """
        policy = retry_policy or self._retry_policy
        payload = {"ApiVersion": API_VERSION, "ApiKey": self._api_key, **(data or {})}
        remaining = policy.retries

        while True:
            try:
                response = await self._client.post(endpoint, json=payload)
            except httpx.TimeoutException as exc:
                log.warning("pleasanter.timeout", endpoint=endpoint)
                raise TransportError(f"timeout calling {endpoint}") from exc
            except httpx.RequestError as exc:
                log.warning("pleasanter.request_failed", endpoint=endpoint, error=str(exc))
                raise TransportError(f"request to {endpoint} failed: {exc}") from exc

            log.debug("pleasanter.response", endpoint=endpoint, status=response.status_code)

            if response.status_code == 429 and remaining > 0:
                remaining -= 1
                log.warning(
                    "pleasanter.rate_limit",
                    endpoint=endpoint,
                    wait_seconds=policy.delay,
                    retries_left=remaining,
                )
                await asyncio.sleep(policy.delay)
                continue

            return self._parse_response(endpoint, response)

    async def get_items(self, site_id: int, request: dict[str, Any] | None = None) -> dict[str, Any]:
        """List items (issues or results) of one site."""
        return await self.post(f"/api/items/{site_id}/get", request)

    async def get_users(self, request: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self.post("/api/users/get", request)

    async def health_check(self) -> bool:
        """Return True if the API answers a one-row user listing."""
        try:
            await self.get_users({"PageSize": 1})
        except FetchError as exc:
            log.warning("pleasanter.health_check_failed", error=str(exc))
            return False
        return True

    # ── internal ───────────────────────────────────────────────────────────

    @staticmethod
    def _parse_response(endpoint: str, response: httpx.Response) -> dict[str, Any]:
        """Decode the JSON body and turn Pleasanter failures into exceptions."""
        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("Message") if isinstance(body, dict) else None

        if response.status_code >= 400:
            log.error(
                "pleasanter.error_response",
                endpoint=endpoint,
                status=response.status_code,
                message=message,
            )
            error_cls = RateLimitError if response.status_code == 429 else RemoteApiError
            if message:
                raise error_cls(f"Pleasanter API Error: {message}", response.status_code)
            raise error_cls(
                f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                response.status_code,
            )

        if not isinstance(body, dict):
            raise RemoteApiError(f"unexpected non-JSON response from {endpoint}")

        status_code = body.get("StatusCode")
        if isinstance(status_code, int) and status_code >= 400:
            raise RemoteApiError(f"API Error {status_code}: {message}", status_code)
        return body
