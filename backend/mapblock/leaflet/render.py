"""Serialization of a Map scene graph to HTML/JS markup.

The output is a sized container ``<div>`` followed by a ``<script>`` that
carries the graph as JSON and a small bootstrap that creates the Leaflet
objects. Serialization is deterministic: the same graph always produces the
same markup (JSON keys are sorted by the ``tojson`` filter).

Layer control entries refer to map layers by their position in
``Map.layers`` so the control toggles the very instances that were added to
the map. Entries for layers that are not on the map are serialized into a
separate ``detached`` list and built on demand.

Entry names are the labels shown by the control and are keys of a JS object,
so a repeated name gets a " (2)", " (3)", ... suffix within its list.

Example:
    >>> from mapblock.geo import Coordinates
    >>> from mapblock.leaflet import nodes, render
    >>> html = render.render_map(nodes.Map("cn-map-1", Coordinates(0, 0)))
    >>> html.startswith('<div id="cn-map-1"')
    True
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import jinja2

if TYPE_CHECKING:
    from mapblock.leaflet import nodes

TEMPLATE_NAME = "map.html"


@functools.lru_cache
def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.PackageLoader("mapblock.leaflet", "templates"),
        autoescape=jinja2.select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def _layer_index(map_: nodes.Map, layer: nodes.Layer) -> int | None:
    for index, child in enumerate(map_.layers):
        if child is layer:
            return index

    return None


def _unique_name(name: str, taken: set[str]) -> str:
    label = name
    suffix = 2
    while label in taken:
        label = f"{name} ({suffix})"
        suffix += 1

    taken.add(label)
    return label


def _control_entries(
    map_: nodes.Map,
    layers: list[nodes.Layer],
    detached: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    entries: list[dict[str, Any]] = []
    taken: set[str] = set()
    for layer in layers:
        index = _layer_index(map_, layer)
        entry: dict[str, Any] = {
            "name": _unique_name(layer.name, taken),
            "layer": index,
            "detached": None,
        }
        if index is None:
            detached.append(layer.to_dict())
            entry["detached"] = len(detached) - 1

        entries.append(entry)

    return entries


def build_config(map_: nodes.Map) -> dict[str, Any]:
    """Build the JSON-serializable config consumed by the JS bootstrap.

    Args:
        map_: The map to serialize.

    Returns:
        Dictionary with the map, its layers and its controls, where control
        entries reference layers by position.
    """
    detached: list[dict[str, Any]] = []
    controls = [
        {
            "type": control.type,
            "id": control.id,
            "options": {"collapsed": control.collapsed},
            "baseLayers": _control_entries(map_, control.get_base_layers(), detached),
            "overlays": _control_entries(map_, control.get_overlays(), detached),
        }
        for control in map_.controls
    ]

    return {
        "id": map_.id,
        "center": map_.center.to_list() if map_.center else None,
        "zoom": map_.zoom,
        "layers": [layer.to_dict() for layer in map_.layers],
        "controls": controls,
        "detached": detached,
    }


def render_map(map_: nodes.Map) -> str:
    """Render a map to HTML/JS markup.

    Args:
        map_: The map to serialize.

    Returns:
        Markup with the map container and its bootstrap script.
    """
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(map=map_, config=build_config(map_))
