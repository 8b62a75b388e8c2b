"""Leaflet scene graph and its HTML/JS serialization.

Submodules:
    - nodes: Map, LayerControl, LayerGroup, Marker and Popup.
    - providers: Raster tile providers (Google Maps, Wikimedia).
    - render: jinja2-based serialization of a Map to markup.

A graph is strictly tree shaped: a layer belongs to at most one parent (a
Map or a LayerGroup) and attaching it elsewhere detaches it first.
"""
