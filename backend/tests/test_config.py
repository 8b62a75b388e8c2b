"""Tests for application configuration and settings.

This module contains unit tests for the Settings Pydantic model and
application configuration logic in mapblock.core.config. It ensures
that default values, environment overrides, and get_settings caching work
as expected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapblock.core import config

if TYPE_CHECKING:
    import pytest


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that Settings has expected default values."""
    monkeypatch.delenv("GOOGLE_MAPS_BROWSER_KEY", raising=False)
    settings = config.Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.google_maps_browser_key == ""
    assert settings.base_latitude == 39.8283
    assert settings.base_longitude == -98.5795
    assert settings.allow_origins == ["*"]
    assert settings.log_level == "INFO"
    assert settings.leaflet_js_url.endswith("leaflet.js")


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables override defaults."""
    monkeypatch.setenv("GOOGLE_MAPS_BROWSER_KEY", "ABC123")
    monkeypatch.setenv("BASE_LATITUDE", "51.5072")
    settings = config.Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.google_maps_browser_key == "ABC123"
    assert settings.base_latitude == 51.5072


def test_get_settings_cached() -> None:
    """Test that get_settings returns cached instance."""
    config.get_settings.cache_clear()
    settings1 = config.get_settings()
    settings2 = config.get_settings()
    assert settings1 is settings2
    config.get_settings.cache_clear()


def test_settings_custom_values() -> None:
    """Test Settings with custom values."""
    settings = config.Settings(
        google_maps_browser_key="key",
        base_latitude=1.5,
        base_longitude=2.5,
        allow_origins=["http://localhost:3000"],
    )
    assert settings.google_maps_browser_key == "key"
    assert settings.base_latitude == 1.5
    assert settings.base_longitude == 2.5
    assert settings.allow_origins == ["http://localhost:3000"]
