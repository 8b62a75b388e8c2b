"""Raster tile providers usable as base layers.

Two providers are available:

- ``GoogleMaps``: Google Maps tiles rendered through the Leaflet
  GoogleMutant plugin. Requires a Google Maps JavaScript API browser key,
  so the page must load the Google Maps API and the plugin script.
- ``Wikimedia``: Wikimedia's OpenStreetMap tiles, usable without a key.
  The provider carries its own required attribution.

Example:
    >>> from mapblock.leaflet import providers
    >>> roadmap = providers.GoogleMaps("roadmap").set_option("name", "Roadmap")
    >>> roadmap.id
    'google-maps-roadmap'
    >>> providers.Wikimedia().get_attribution()[:9]
    '<a href="'
"""

from __future__ import annotations

from typing import Any, ClassVar

from mapblock.leaflet import nodes


class TileProvider(nodes.Layer):
    """Base class for raster tile providers.

    Attributes:
        url: Leaflet tile URL template, empty for providers that do not load
            tiles by URL.
    """

    type: ClassVar[str] = "tileLayer"

    def __init__(
        self,
        id: str,
        url: str = "",
        options: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(id, options)
        self.url = url

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["url"] = self.url
        return data


class GoogleMaps(TileProvider):
    """Google Maps base layer of a given map type."""

    type: ClassVar[str] = "googleMutant"

    MAP_TYPES: ClassVar[tuple[str, ...]] = ("roadmap", "satellite", "terrain", "hybrid")

    def __init__(self, map_type: str = "roadmap") -> None:
        if map_type not in self.MAP_TYPES:
            raise ValueError(
                f"Unknown Google Maps type {map_type!r}, "
                f"expected one of {', '.join(self.MAP_TYPES)}"
            )

        super().__init__(f"google-maps-{map_type}", options={"type": map_type, "maxZoom": 21})
        self.map_type = map_type


class Wikimedia(TileProvider):
    """Wikimedia OpenStreetMap tiles."""

    URL: ClassVar[str] = "https://maps.wikimedia.org/osm-intl/{z}/{x}/{y}{r}.png"
    ATTRIBUTION: ClassVar[str] = (
        '<a href="https://wikimediafoundation.org/wiki/Maps_Terms_of_Use" '
        'target="_blank">Wikimedia</a> | Map data &copy; '
        '<a href="https://openstreetmap.org/copyright" target="_blank">'
        "OpenStreetMap contributors</a>"
    )

    def __init__(self) -> None:
        super().__init__("wikimedia", self.URL, options={"minZoom": 1, "maxZoom": 19})
        self.attribution = self.ATTRIBUTION
