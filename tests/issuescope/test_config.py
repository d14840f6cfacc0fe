"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from issuescope.core.config import ConfigError, PleasanterSettings, load_settings

_VARS = (
    "PLEASANTER_BASE_URL",
    "PLEASANTER_API_KEY",
    "PLEASANTER_TIMEOUT",
    "PLEASANTER_RETRIES",
    "PLEASANTER_RETRY_DELAY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in _VARS:
        monkeypatch.delenv(var, raising=False)


def _required(monkeypatch):
    monkeypatch.setenv("PLEASANTER_BASE_URL", "https://pleasanter.example.com/")
    monkeypatch.setenv("PLEASANTER_API_KEY", "k-123")


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        _required(monkeypatch)
        assert load_settings() == PleasanterSettings(
            base_url="https://pleasanter.example.com",
            api_key="k-123",
            timeout=30.0,
            retries=3,
            retry_delay=1.0,
        )

    def test_overrides(self, monkeypatch):
        _required(monkeypatch)
        monkeypatch.setenv("PLEASANTER_TIMEOUT", "5")
        monkeypatch.setenv("PLEASANTER_RETRIES", "0")
        monkeypatch.setenv("PLEASANTER_RETRY_DELAY", "0.25")

        settings = load_settings()
        assert settings.timeout == 5.0
        assert settings.retries == 0
        assert settings.retry_delay == 0.25

    @pytest.mark.parametrize("missing", ["PLEASANTER_BASE_URL", "PLEASANTER_API_KEY"])
    def test_required(self, monkeypatch, missing):
        _required(monkeypatch)
        monkeypatch.delenv(missing)
        with pytest.raises(ConfigError, match="required"):
            load_settings()

    def test_blank_counts_as_missing(self, monkeypatch):
        _required(monkeypatch)
        monkeypatch.setenv("PLEASANTER_API_KEY", "   ")
        with pytest.raises(ConfigError):
            load_settings()

    @pytest.mark.parametrize(
        ("var", "value"),
        [("PLEASANTER_TIMEOUT", "soon"), ("PLEASANTER_RETRIES", "2.5")],
    )
    def test_malformed(self, monkeypatch, var, value):
        _required(monkeypatch)
        monkeypatch.setenv(var, value)
        with pytest.raises(ConfigError, match=var):
            load_settings()
