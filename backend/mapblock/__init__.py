"""Map block shortcode service for Leaflet maps embedded in post content.

This package expands the ``[cn-mapblock]`` shortcode, and the ``[maplayer]``
and ``[mapmarker]`` shortcodes nested inside it, into an in-memory Leaflet
scene graph and serializes that graph to HTML/JS markup.

- Shortcode tokenizing and attribute parsing live in ``mapblock.shortcode``
- The scene graph (map, layer control, layer groups, markers, popups,
  tile providers) and its serialization live in ``mapblock.leaflet``
- Configuration, options lookup and logging live in ``mapblock.core``
- A FastAPI surface exposes graph building and page expansion over HTTP

See DESIGN.md and module sub-docstrings for details on architecture and usage.
"""
