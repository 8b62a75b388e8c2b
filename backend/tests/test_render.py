"""Unit tests for the markup serialization in mapblock.leaflet.render.

Key coverage:
    - The container div carries the map id and CSS dimensions.
    - Control entries reference map layers by position, or detached layers.
    - Popup HTML is JSON-escaped so it cannot close the script element.
    - Rendering is deterministic.
    - Repeated control entry names get numbered suffixes.
"""

from __future__ import annotations

import json
import re

from mapblock.geo import Coordinates
from mapblock.leaflet import nodes, providers, render


def _config_from_html(html: str) -> dict:
    match = re.search(r"\}\)\((\{.*\})\);\s*</script>", html, re.DOTALL)
    assert match is not None
    return json.loads(match.group(1))


def _sample_map() -> nodes.Map:
    map_ = nodes.Map("cn-map-1", Coordinates(40.0, -75.0), zoom=10)
    control = nodes.LayerControl("layerControl").set_collapsed(False)
    group = nodes.LayerGroup("shops").set_option("name", "Shops")
    nodes.Marker("m1", Coordinates(40.1, -75.1)).bind_popup(
        nodes.Popup("default", "</script><b>Hi</b>")
    ).add_to(group)
    control.add_overlay(group)
    map_.add_layer(providers.Wikimedia()).add_control(control)
    map_.add_layers(control.get_overlays())
    return map_


def test_build_config_references_layers_by_position() -> None:
    """Test that control entries point at map layers by index."""
    config = render.build_config(_sample_map())
    assert config["id"] == "cn-map-1"
    assert config["center"] == [40.0, -75.0]
    assert [layer["id"] for layer in config["layers"]] == ["wikimedia", "shops"]
    assert config["controls"][0]["overlays"] == [
        {"name": "Shops", "layer": 1, "detached": None}
    ]
    assert config["detached"] == []


def test_build_config_detached_control_layers() -> None:
    """Test that control layers not on the map are listed as detached."""
    map_ = nodes.Map("cn-map-1")
    control = nodes.LayerControl("layerControl")
    control.add_base_layer(providers.GoogleMaps("roadmap").set_option("name", "Roadmap"))
    map_.add_control(control)

    config = render.build_config(map_)
    assert config["controls"][0]["baseLayers"] == [
        {"name": "Roadmap", "layer": None, "detached": 0}
    ]
    assert config["detached"][0]["id"] == "google-maps-roadmap"


def test_render_map_container() -> None:
    """Test the container div and its dimensions."""
    map_ = _sample_map().set_height("300px").set_width("50%")
    html = render.render_map(map_)
    assert html.startswith(
        '<div id="cn-map-1" class="cn-map" style="height: 300px; width: 50%;"></div>'
    )
    assert "L.map(config.id" in html


def test_render_map_escapes_popup_markup() -> None:
    """Test that popup HTML cannot close the script element."""
    html = render.render_map(_sample_map())
    assert html.count("</script>") == 1
    config = _config_from_html(html)
    popup = config["layers"][1]["layers"][0]["popup"]
    assert popup["content"] == "</script><b>Hi</b>"


def test_render_map_escapes_container_attributes() -> None:
    """Test that the map id is escaped in the container div."""
    map_ = nodes.Map('x" onload="alert(1)')
    html = render.render_map(map_)
    assert 'onload="alert(1)"' not in html


def test_render_is_deterministic() -> None:
    """Test that the same graph renders the same markup."""
    assert render.render_map(_sample_map()) == render.render_map(_sample_map())


def test_map_str_renders() -> None:
    """Test that str() and render() of a map match render_map."""
    map_ = _sample_map()
    assert str(map_) == map_.render() == render.render_map(map_)


def test_build_config_repeated_control_names_get_suffixes() -> None:
    """Test that overlays sharing a name stay separately selectable."""
    map_ = nodes.Map("cn-map-1")
    control = nodes.LayerControl("layerControl")
    for _ in range(3):
        control.add_overlay(nodes.LayerGroup("layer"))

    map_.add_control(control).add_layers(control.get_overlays())

    config = render.build_config(map_)
    assert config["controls"][0]["overlays"] == [
        {"name": "layer", "layer": 0, "detached": None},
        {"name": "layer (2)", "layer": 1, "detached": None},
        {"name": "layer (3)", "layer": 2, "detached": None},
    ]


def test_build_config_names_are_unique_per_list() -> None:
    """Test that a base layer and an overlay may share a name."""
    map_ = nodes.Map("cn-map-1")
    control = nodes.LayerControl("layerControl")
    control.add_base_layer(providers.Wikimedia().set_option("name", "Map"))
    control.add_overlay(nodes.LayerGroup("Map"))
    map_.add_control(control).add_layers(control.get_base_layers())
    map_.add_layers(control.get_overlays())

    (entry,) = render.build_config(map_)["controls"][0]["baseLayers"]
    assert entry["name"] == "Map"
    (entry,) = render.build_config(map_)["controls"][0]["overlays"]
    assert entry["name"] == "Map"
