"""Unit tests for the tile providers in mapblock.leaflet.providers."""

from __future__ import annotations

import pytest

from mapblock.leaflet import providers


def test_google_maps_roadmap() -> None:
    """Test the Google Maps roadmap layer."""
    layer = providers.GoogleMaps("roadmap")
    assert layer.id == "google-maps-roadmap"
    assert layer.type == "googleMutant"
    assert layer.get_option("type") == "roadmap"
    assert layer.get_attribution() == ""


def test_google_maps_unknown_type() -> None:
    """Test that an unknown Google Maps type is rejected."""
    with pytest.raises(ValueError, match="Unknown Google Maps type"):
        providers.GoogleMaps("moon")


def test_wikimedia() -> None:
    """Test the Wikimedia layer and its attribution."""
    layer = providers.Wikimedia()
    assert layer.id == "wikimedia"
    assert layer.type == "tileLayer"
    assert layer.url == providers.Wikimedia.URL
    assert "Wikimedia" in layer.get_attribution()
    assert "OpenStreetMap" in layer.get_attribution()

    data = layer.to_dict()
    assert data["url"] == providers.Wikimedia.URL
    assert data["options"]["maxZoom"] == 19
    assert data["options"]["attribution"] == providers.Wikimedia.ATTRIBUTION
