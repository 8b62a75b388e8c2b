"""The ``[cn-mapblock]`` shortcode: nested shortcodes to a Leaflet scene graph.

A map block looks like this in post content::

    [cn-mapblock latitude="40.0" longitude="-75.0" zoom="10"]
      [maplayer id="shops" name="Shops" control="true"]
        [mapmarker id="m1" latitude="40.1" longitude="-75.1"]Hello[/mapmarker]
      [/maplayer]
      [mapmarker latitude="40.2" longitude="-75.2"/]
      Text shown in the popup of the default marker.
    [/cn-mapblock]

Building the graph:

1. The block's attributes are merged over their defaults; ``latitude`` and
   ``longitude`` default to the site's base geo coordinates.
2. A Map is created with that center and zoom, and a non-collapsed layer
   control named ``layerControl`` is attached to it.
3. Base layers are composed (see ``compose_base_layers``).
4. Every ``[maplayer]`` with content becomes a LayerGroup holding the
   markers of its ``[mapmarker]`` children. Groups with ``control="true"``
   become overlays of the layer control, others go straight on the map.
   A ``[maplayer]`` with empty content is dropped.
5. ``[mapmarker]`` shortcodes left outside any layer go straight on the map.
6. When ``marker`` is true, a default marker is placed at the block's
   coordinates; whatever plain content is left after all nested shortcodes
   are removed becomes its popup.
7. The layer control's base layers, then its overlays, are added to the map.

Invalid coordinates never fail the build: the affected marker is skipped.

Example:
    >>> from mapblock.shortcode import map_block
    >>> context = map_block.MapBlockContext(browser_key="")
    >>> block = map_block.MapBlock(
    ...     {"id": "cn-map-1", "latitude": "40.0", "longitude": "-75.0"},
    ...     '[mapmarker id="m1" latitude="40.1" longitude="-75.1"]Hi[/mapmarker]',
    ...     context=context,
    ... )
    >>> [layer.id for layer in block.map.layers]
    ['wikimedia', 'm1', 'default']
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Self

from mapblock import geo
from mapblock.core import options as site_options
from mapblock.leaflet import nodes, providers
from mapblock.shortcode import attributes, scanner

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mapblock.shortcode import registry

logger = logging.getLogger(__name__)

TAG = "cn-mapblock"
LAYER_TAG = "maplayer"
MARKER_TAG = "mapmarker"

ATTRIBUTION_SEPARATOR = " | "
LEAFLET_CREDIT = (
    '<a href="https://leafletjs.com/" target="_blank" title="Leaflet">Leaflet</a>'
)
BACKLINK = (
    '<a href="https://connections-pro.com/" target="_blank" '
    'title="Connections Business Directory plugin for WordPress">'
    "Connections Business Directory</a>" + ATTRIBUTION_SEPARATOR + LEAFLET_CREDIT
)

GOOGLE_BASE_LAYERS: tuple[tuple[str, str], ...] = (
    ("roadmap", "Roadmap"),
    ("hybrid", "Satellite"),
)


@dataclasses.dataclass(frozen=True)
class MapBlockContext:
    """Site configuration read once per build.

    Attributes:
        browser_key: Google Maps browser API key, empty when not configured.
        base_latitude: Latitude used when a block omits ``latitude``.
        base_longitude: Longitude used when a block omits ``longitude``.
    """

    browser_key: str = ""
    base_latitude: float = 0.0
    base_longitude: float = 0.0


def context_from_options(options: site_options.OptionsProtocol) -> MapBlockContext:
    """Read the map block configuration from site options.

    Args:
        options: Options lookup.

    Returns:
        MapBlockContext with the browser key and base coordinates.
    """
    geo_coordinates = options.get_base_geo_coordinates()
    return MapBlockContext(
        browser_key=options.get(*site_options.BROWSER_KEY).strip(),
        base_latitude=geo_coordinates["latitude"],
        base_longitude=geo_coordinates["longitude"],
    )


def compose_base_layers(
    map_: nodes.Map,
    layer_control: nodes.LayerControl,
    browser_key: str,
) -> None:
    """Choose the base layers and compose their attribution.

    The attribution always starts with the plugin backlink and the Leaflet
    credit. With a browser key, Google Maps "Roadmap" and "Satellite" layers
    are offered as base layers of the control and carry only that fixed
    credit. Without one, a single Wikimedia layer is put directly on the map
    with the fixed credit followed by Wikimedia's own.

    Args:
        map_: Map receiving the fixed base layer in the keyless case.
        layer_control: Control receiving the selectable base layers.
        browser_key: Google Maps browser API key, possibly empty.
    """
    attribution = [BACKLINK]

    if browser_key:
        for map_type, name in GOOGLE_BASE_LAYERS:
            layer = providers.GoogleMaps(map_type)
            layer.set_attribution(ATTRIBUTION_SEPARATOR.join(attribution)).set_option(
                "name", name
            )
            layer_control.add_base_layer(layer)

        return

    base_map = providers.Wikimedia()
    attribution.append(base_map.get_attribution())
    base_map.set_attribution(ATTRIBUTION_SEPARATOR.join(attribution))
    map_.add_layer(base_map)


class MapBlock:
    """Scene graph built from one ``[cn-mapblock]`` occurrence.

    Attributes:
        attributes: The block's resolved attributes.
        map: The built Map.
        layer_control: The Map's layer control.
        context: Configuration the block was built with.
        tag: Tag name the block was invoked as.
    """

    TAG = TAG

    def __init__(
        self,
        atts: Mapping[str, Any],
        content: str = "",
        tag: str = TAG,
        *,
        context: MapBlockContext,
    ) -> None:
        self.context = context
        self.tag = tag
        self.attributes = attributes.MapBlockAttributes.from_atts(
            atts,
            defaults={
                "latitude": context.base_latitude,
                "longitude": context.base_longitude,
            },
        )

        self.map = nodes.Map(self.attributes.id, self._center(), self.attributes.zoom)
        self.layer_control = nodes.LayerControl("layerControl").set_collapsed(False)

        compose_base_layers(self.map, self.layer_control, context.browser_key)

        self.map.set_height(self.attributes.height).set_width(
            self.attributes.width
        ).add_control(self.layer_control)

        content = self._parse_layers(content)
        content = self._parse_markers(content)

        if self.attributes.marker:
            self._add_default_marker(content)

        self.map.add_layers(self.layer_control.get_base_layers())
        self.map.add_layers(self.layer_control.get_overlays())

    def __str__(self) -> str:
        return self.map.render()

    @classmethod
    def create(
        cls,
        atts: Mapping[str, Any],
        content: str = "",
        tag: str = TAG,
        *,
        context: MapBlockContext,
    ) -> Self:
        return cls(atts, content, tag, context=context)

    @classmethod
    def add(cls, shortcodes: registry.ShortcodeRegistry, context: MapBlockContext) -> None:
        """Register the ``[cn-mapblock]`` handler.

        Args:
            shortcodes: Registry to register with.
            context: Configuration every expanded block is built with.
        """

        def handler(atts: Mapping[str, str], content: str, tag: str) -> str:
            return str(cls(atts, content, tag, context=context))

        shortcodes.add(cls.TAG, handler)

    def _center(self) -> geo.Coordinates | None:
        try:
            return geo.Coordinates.create(self.attributes.latitude, self.attributes.longitude)
        except geo.CoordinateError as e:
            logger.debug("Map %r has an invalid center (%s)", self.attributes.id, e)

        try:
            return geo.Coordinates.create(
                self.context.base_latitude, self.context.base_longitude
            )
        except geo.CoordinateError as e:
            logger.debug("Base geo coordinates are invalid (%s)", e)
            return None

    def _parse_layers(self, content: str) -> str:
        """Build a LayerGroup per ``[maplayer]`` and return the leftover."""
        extraction = scanner.extract_all(content, LAYER_TAG, skip_empty=True)

        for shortcode in extraction.shortcodes:
            parsed = attributes.parse_atts(
                attributes.normalize_quotes(shortcode.attributes_text)
            )
            atts = attributes.LayerAttributes.from_atts(parsed.as_dict())

            layer_group = nodes.LayerGroup(atts.id)
            if atts.name:
                layer_group.set_option("name", atts.name)

            self._parse_markers(shortcode.content, layer_group)

            if atts.control:
                self.layer_control.add_overlay(layer_group)
            else:
                layer_group.add_to(self.map)

            logger.debug(
                "Layer %r built with %d marker(s)", atts.id, len(layer_group.layers)
            )

        return extraction.remainder

    def _parse_markers(
        self,
        content: str,
        layer: nodes.LayerGroup | None = None,
    ) -> str:
        """Build a Marker per ``[mapmarker]`` and return the leftover.

        Markers go into ``layer`` when given, otherwise onto the map.
        """
        extraction = scanner.extract_all(content, MARKER_TAG)

        for shortcode in extraction.shortcodes:
            parsed = attributes.parse_atts(shortcode.attributes_text)
            atts = attributes.MarkerAttributes.from_atts(parsed.as_dict())

            try:
                coordinates = geo.Coordinates.create(atts.latitude, atts.longitude)
            except geo.CoordinateError as e:
                logger.debug("Skipping marker %r: %s", atts.id, e)
                continue

            marker = nodes.Marker(atts.id, coordinates)
            if shortcode.content:
                marker.bind_popup(nodes.Popup("default", shortcode.content))

            marker.add_to(layer if layer is not None else self.map)

        return extraction.remainder

    def _add_default_marker(self, content: str) -> None:
        try:
            coordinates = geo.Coordinates.create(
                self.attributes.latitude, self.attributes.longitude
            )
        except geo.CoordinateError as e:
            logger.debug("Skipping default marker of %r: %s", self.attributes.id, e)
            return

        marker = nodes.Marker("default", coordinates)
        if content:
            marker.bind_popup(nodes.Popup("default", content))

        marker.add_to(self.map)


def build_map(
    atts: Mapping[str, Any],
    content: str,
    context: MapBlockContext,
) -> nodes.Map:
    """Build the Map for one ``[cn-mapblock]`` occurrence.

    Args:
        atts: The block's attributes.
        content: The block's inner content.
        context: Site configuration.

    Returns:
        The built Map, possibly sparse but always renderable.
    """
    return MapBlock(atts, content, context=context).map
