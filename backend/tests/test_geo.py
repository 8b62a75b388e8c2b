"""Unit tests for mapblock.geo.Coordinates.

Valid pairs anywhere inside the latitude/longitude ranges construct; missing,
non-numeric, non-finite and out-of-range values raise CoordinateError.
"""

from __future__ import annotations

import pytest

from mapblock import geo


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [
        (0, 0),
        (90, 180),
        (-90, -180),
        ("40.1", "-75.1"),
        (" 12.5 ", "7"),
    ],
)
def test_create_valid(latitude: object, longitude: object) -> None:
    """Test that in-range values construct."""
    coordinates = geo.Coordinates.create(latitude, longitude)
    assert coordinates.latitude == float(str(latitude))
    assert coordinates.longitude == float(str(longitude))


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [
        (90.0001, 0),
        (-91, 0),
        (0, 180.5),
        (0, -181),
        (None, 0),
        (0, None),
        ("", "1"),
        ("north", "1"),
        ("nan", "1"),
        ("inf", "1"),
        (True, 1),
    ],
)
def test_create_invalid(latitude: object, longitude: object) -> None:
    """Test that invalid values raise CoordinateError."""
    with pytest.raises(geo.CoordinateError):
        geo.Coordinates.create(latitude, longitude)


def test_direct_construction_validates() -> None:
    """Constructing the dataclass directly applies the same range checks."""
    with pytest.raises(geo.CoordinateError):
        geo.Coordinates(100.0, 0.0)


def test_coordinate_error_is_value_error() -> None:
    """Test that CoordinateError can be caught as ValueError."""
    assert issubclass(geo.CoordinateError, ValueError)


def test_to_list() -> None:
    """Test the ``[latitude, longitude]`` list form."""
    assert geo.Coordinates(40.0, -75.0).to_list() == [40.0, -75.0]
