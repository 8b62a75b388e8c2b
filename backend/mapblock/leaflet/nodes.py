"""Scene graph nodes for a Leaflet map.

The nodes mirror the Leaflet objects they are rendered into: a ``Map`` owns
an ordered list of layers and controls, a ``LayerGroup`` owns an ordered
list of child layers, a ``Marker`` may carry a bound ``Popup`` and a
``LayerControl`` lists base layers and overlays the user can switch between.

Setters return the node so calls can be chained, the way the Leaflet API
reads in JavaScript.

Example:
    Build a small graph by hand:
        >>> from mapblock.geo import Coordinates
        >>> from mapblock.leaflet import nodes
        >>> map_ = nodes.Map("cn-map-1", Coordinates(40.0, -75.0), zoom=10)
        >>> group = nodes.LayerGroup("shops").set_option("name", "Shops")
        >>> marker = nodes.Marker("m1", Coordinates(40.1, -75.1))
        >>> marker.bind_popup(nodes.Popup("default", "Hello")).add_to(group)
        >>> control = nodes.LayerControl("layerControl").set_collapsed(False)
        >>> control.add_overlay(group)
        >>> map_.add_control(control).add_layers(control.get_overlays())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from mapblock.leaflet import render

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mapblock.geo import Coordinates


class LayerContainer:
    """Shared child-layer bookkeeping for Map and LayerGroup."""

    layers: list[Layer]

    def add_layer(self, layer: Layer) -> Self:
        """Attach a layer, detaching it from any previous parent first.

        Args:
            layer: Layer to attach. Attaching a layer that is already a child
                moves it to the end of the list.

        Returns:
            This container.
        """
        if layer.parent is not None:
            layer.parent.remove_layer(layer)

        self.layers.append(layer)
        layer.parent = self
        return self

    def add_layers(self, layers: Iterable[Layer]) -> Self:
        for layer in list(layers):
            self.add_layer(layer)

        return self

    def remove_layer(self, layer: Layer) -> Self:
        for index, child in enumerate(self.layers):
            if child is layer:
                del self.layers[index]
                layer.parent = None
                break

        return self

    def has_layer(self, layer: Layer) -> bool:
        return any(child is layer for child in self.layers)


class Layer:
    """Base class for anything that can be added to a map.

    Attributes:
        id: Identifier of the layer, unique within its map by convention.
        options: Leaflet options passed through to the JS constructor.
        attribution: Credit text shown in the attribution control.
        parent: The Map or LayerGroup the layer is attached to, if any.
    """

    type: ClassVar[str] = "layer"

    def __init__(self, id: str, options: dict[str, Any] | None = None) -> None:
        self.id = id
        self.options: dict[str, Any] = dict(options or {})
        self.attribution = ""
        self.parent: LayerContainer | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    @property
    def name(self) -> str:
        """Display name: the ``name`` option, or the id when unset."""
        return str(self.options.get("name") or self.id)

    def set_option(self, key: str, value: Any) -> Self:
        self.options[key] = value
        return self

    def get_option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def set_attribution(self, attribution: str) -> Self:
        self.attribution = attribution
        return self

    def get_attribution(self) -> str:
        return self.attribution

    def add_to(self, target: LayerContainer) -> Self:
        """Attach this layer to a Map or LayerGroup.

        Args:
            target: The new parent.

        Returns:
            This layer.
        """
        target.add_layer(self)
        return self

    def remove(self) -> Self:
        if self.parent is not None:
            self.parent.remove_layer(self)

        return self

    def _options_dict(self) -> dict[str, Any]:
        options = dict(self.options)
        if self.attribution:
            options["attribution"] = self.attribution

        return options

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id, "options": self._options_dict()}


class Popup:
    """Content bubble bound to a marker.

    Attributes:
        id: Identifier of the popup.
        content: HTML or text shown in the bubble.
    """

    def __init__(self, id: str, content: str) -> None:
        self.id = id
        self.content = content

    def __repr__(self) -> str:
        return f"Popup(id={self.id!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "content": self.content}


class Marker(Layer):
    """A point marker, optionally with a bound popup."""

    type: ClassVar[str] = "marker"

    def __init__(
        self,
        id: str,
        coordinates: Coordinates,
        options: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(id, options)
        self.coordinates = coordinates
        self.popup: Popup | None = None

    def bind_popup(self, popup: Popup) -> Self:
        self.popup = popup
        return self

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["latLng"] = self.coordinates.to_list()
        data["popup"] = self.popup.to_dict() if self.popup else None
        return data


class LayerGroup(LayerContainer, Layer):
    """A named collection of layers toggled as one overlay."""

    type: ClassVar[str] = "layerGroup"

    def __init__(self, id: str, options: dict[str, Any] | None = None) -> None:
        super().__init__(id, options)
        self.layers: list[Layer] = []

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["layers"] = [layer.to_dict() for layer in self.layers]
        return data


class LayerControl:
    """The Leaflet layers control.

    Base layers are mutually exclusive in the browser, overlays can be toggled
    independently. The control only lists layers; adding them to the map is
    the map owner's job.

    Attributes:
        id: Identifier of the control.
        collapsed: Whether the control renders collapsed behind an icon.
    """

    type: ClassVar[str] = "layers"

    def __init__(self, id: str, collapsed: bool = True) -> None:
        self.id = id
        self.collapsed = collapsed
        self._base_layers: list[Layer] = []
        self._overlays: list[Layer] = []

    def __repr__(self) -> str:
        return f"LayerControl(id={self.id!r})"

    def set_collapsed(self, collapsed: bool) -> Self:
        self.collapsed = collapsed
        return self

    def add_base_layer(self, layer: Layer) -> Self:
        self._base_layers.append(layer)
        return self

    def add_overlay(self, layer: Layer) -> Self:
        self._overlays.append(layer)
        return self

    def get_base_layers(self) -> list[Layer]:
        return list(self._base_layers)

    def get_overlays(self) -> list[Layer]:
        return list(self._overlays)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "options": {"collapsed": self.collapsed},
            "baseLayers": [
                {"name": layer.name, "id": layer.id} for layer in self._base_layers
            ],
            "overlays": [
                {"name": layer.name, "id": layer.id} for layer in self._overlays
            ],
        }


class Map(LayerContainer):
    """Root of the scene graph.

    Attributes:
        id: DOM id of the map container, unique per page.
        center: Initial center, or None when no valid center is known.
        zoom: Initial zoom level.
        height: CSS height of the container.
        width: CSS width of the container.
        layers: Layers attached directly to the map, in stacking order.
        controls: Controls attached to the map.
    """

    def __init__(
        self,
        id: str,
        center: Coordinates | None = None,
        zoom: int = 16,
    ) -> None:
        self.id = id
        self.center = center
        self.zoom = zoom
        self.height = "400px"
        self.width = "100%"
        self.layers: list[Layer] = []
        self.controls: list[LayerControl] = []

    def __repr__(self) -> str:
        return f"Map(id={self.id!r})"

    def __str__(self) -> str:
        return self.render()

    def set_center(self, center: Coordinates | None) -> Self:
        self.center = center
        return self

    def set_zoom(self, zoom: int) -> Self:
        self.zoom = zoom
        return self

    def set_height(self, height: str) -> Self:
        self.height = height
        return self

    def set_width(self, width: str) -> Self:
        self.width = width
        return self

    def add_control(self, control: LayerControl) -> Self:
        self.controls.append(control)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "center": self.center.to_list() if self.center else None,
            "zoom": self.zoom,
            "height": self.height,
            "width": self.width,
            "layers": [layer.to_dict() for layer in self.layers],
            "controls": [control.to_dict() for control in self.controls],
        }

    def render(self) -> str:
        """Serialize the map to HTML/JS markup.

        Returns:
            Markup suitable for embedding directly in an HTML response.
        """
        return render.render_map(self)
