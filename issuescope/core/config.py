"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


@dataclass(frozen=True)
class PleasanterSettings:
    """Connection settings for the remote Pleasanter instance."""

    base_url: str
    api_key: str
    timeout: float = 30.0
    retries: int = 3
    retry_delay: float = 1.0


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc


def load_settings() -> PleasanterSettings:
    """Build :class:`PleasanterSettings` from the environment.

    Required:
        PLEASANTER_BASE_URL, PLEASANTER_API_KEY
    Optional:
        PLEASANTER_TIMEOUT      — seconds per HTTP call (default: 30)
        PLEASANTER_RETRIES      — rate-limit retry budget (default: 3)
        PLEASANTER_RETRY_DELAY  — fixed backoff in seconds (default: 1.0)

    Raises :class:`ConfigError` if a required variable is unset.
    """
    base_url = os.environ.get("PLEASANTER_BASE_URL", "").strip()
    api_key = os.environ.get("PLEASANTER_API_KEY", "").strip()
    if not base_url or not api_key:
        raise ConfigError(
            "PLEASANTER_BASE_URL and PLEASANTER_API_KEY environment variables are required"
        )
    return PleasanterSettings(
        base_url=base_url.rstrip("/"),
        api_key=api_key,
        timeout=_env_float("PLEASANTER_TIMEOUT", 30.0),
        retries=_env_int("PLEASANTER_RETRIES", 3),
        retry_delay=_env_float("PLEASANTER_RETRY_DELAY", 1.0),
    )
