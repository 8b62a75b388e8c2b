"""Shortcode tokenizing, attribute parsing and the map block shortcode.

Submodules:
    - attributes: ``key="value"`` tokenizing and per-shortcode schemas.
    - scanner: Left-to-right extraction of ``[tag]...[/tag]`` occurrences.
    - registry: Host-side expansion of registered shortcodes in content.
    - map_block: The ``[cn-mapblock]`` scene graph builder.
"""
