"""Post content expansion and the browser assets it needs.

``render_page`` expands every ``[cn-mapblock]`` in a piece of post content
and lists the stylesheets and scripts the page must load. Leaflet is only
needed when the content actually holds a map block, and the Google Maps API
plus the GoogleMutant plugin only when a browser key is configured.

Example:
    >>> from mapblock.core import config
    >>> from mapblock.pages import render_page
    >>> from mapblock.shortcode.map_block import MapBlockContext
    >>> page = render_page("No map here.", MapBlockContext(), config.Settings())
    >>> page.html, page.styles, page.scripts
    ('No map here.', [], [])
"""

from __future__ import annotations

import dataclasses
import urllib.parse
from typing import TYPE_CHECKING

from mapblock.shortcode import map_block, registry, scanner

if TYPE_CHECKING:
    from mapblock.core import config


@dataclasses.dataclass(frozen=True)
class RenderedPage:
    """Expanded content and the assets it requires.

    Attributes:
        html: Content with map blocks replaced by their markup.
        styles: Stylesheet URLs, in load order.
        scripts: Script URLs, in load order.
    """

    html: str
    styles: list[str]
    scripts: list[str]


def asset_urls(
    content: str,
    context: map_block.MapBlockContext,
    settings: config.Settings,
) -> tuple[list[str], list[str]]:
    """Select the stylesheets and scripts a piece of content needs.

    Args:
        content: Raw post content.
        context: Map block configuration.
        settings: Application settings holding the asset URLs.

    Returns:
        (styles, scripts), both empty when the content holds no map block.
    """
    if not scanner.has_shortcode(content, map_block.TAG):
        return [], []

    styles = [settings.leaflet_css_url]
    scripts = [settings.leaflet_js_url]
    if context.browser_key:
        query = urllib.parse.urlencode({"key": context.browser_key})
        scripts.append(f"{settings.google_maps_js_url}?{query}")
        scripts.append(settings.google_mutant_js_url)

    return styles, scripts


def render_page(
    content: str,
    context: map_block.MapBlockContext,
    settings: config.Settings,
) -> RenderedPage:
    """Expand map blocks in post content.

    Args:
        content: Raw post content.
        context: Map block configuration.
        settings: Application settings holding the asset URLs.

    Returns:
        RenderedPage with the expanded content and its assets.
    """
    shortcodes = registry.ShortcodeRegistry()
    map_block.MapBlock.add(shortcodes, context)

    styles, scripts = asset_urls(content, context, settings)
    return RenderedPage(shortcodes.do_shortcode(content), styles, scripts)
