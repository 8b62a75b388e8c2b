"""Geographic coordinate value type.

Coordinates are validated on construction: latitude must lie in [-90, 90]
and longitude in [-180, 180]. Invalid input raises CoordinateError, which
callers in the shortcode builder catch so that the affected marker is
skipped instead of failing the whole map.

Example:
    >>> from mapblock.geo import Coordinates, CoordinateError
    >>> Coordinates.create("40.1", "-75.1")
    Coordinates(latitude=40.1, longitude=-75.1)
    >>> try:
    ...     Coordinates.create("91", "0")
    ... except CoordinateError as e:
    ...     print(e)
    latitude 91.0 is outside [-90, 90]
"""

from __future__ import annotations

import dataclasses
import math


class CoordinateError(ValueError):
    """Raised when a latitude/longitude pair is missing or out of range."""


def _to_float(value: object, label: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise CoordinateError(f"{label} is missing")

    if isinstance(value, bool):
        raise CoordinateError(f"{label} must be numeric, got {value!r}")

    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise CoordinateError(f"{label} must be numeric, got {value!r}") from e

    if not math.isfinite(number):
        raise CoordinateError(f"{label} must be finite, got {value!r}")

    return number


@dataclasses.dataclass(frozen=True)
class Coordinates:
    """A validated WGS84 latitude/longitude pair.

    Attributes:
        latitude: Degrees north, in [-90, 90].
        longitude: Degrees east, in [-180, 180].
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise CoordinateError(f"latitude {self.latitude} is outside [-90, 90]")

        if not -180.0 <= self.longitude <= 180.0:
            raise CoordinateError(
                f"longitude {self.longitude} is outside [-180, 180]"
            )

    @classmethod
    def create(cls, latitude: object, longitude: object) -> Coordinates:
        """Build coordinates from loosely typed shortcode values.

        Args:
            latitude: Number or numeric string.
            longitude: Number or numeric string.

        Returns:
            The validated Coordinates.

        Raises:
            CoordinateError: If either value is missing, non-numeric,
                non-finite or out of range.
        """
        return cls(_to_float(latitude, "latitude"), _to_float(longitude, "longitude"))

    def to_list(self) -> list[float]:
        """Return ``[latitude, longitude]`` as Leaflet expects a LatLng."""
        return [self.latitude, self.longitude]
