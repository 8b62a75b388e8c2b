"""Unit tests for post content expansion in mapblock.pages.

Covers asset selection (Leaflet only when a map block is present, Google
scripts only with a browser key) and the expansion of map blocks inside
surrounding content.
"""

from __future__ import annotations

import urllib.parse

from mapblock import pages
from mapblock.core import config
from mapblock.shortcode import map_block

SETTINGS = config.Settings(
    leaflet_css_url="https://cdn.test/leaflet.css",
    leaflet_js_url="https://cdn.test/leaflet.js",
    google_maps_js_url="https://maps.test/api/js",
    google_mutant_js_url="https://cdn.test/mutant.js",
)

NO_KEY = map_block.MapBlockContext()
WITH_KEY = map_block.MapBlockContext(browser_key="ABC 123")


def test_content_without_map_needs_no_assets() -> None:
    """Test that content without a block is returned as-is with no assets."""
    page = pages.render_page("<p>Plain post</p>", NO_KEY, SETTINGS)
    assert page == pages.RenderedPage("<p>Plain post</p>", [], [])


def test_escaped_map_block_needs_no_assets() -> None:
    """Test that an escaped block is unwrapped and loads nothing."""
    page = pages.render_page("Use [[cn-mapblock]] to embed a map.", NO_KEY, SETTINGS)
    assert page.html == "Use [cn-mapblock] to embed a map."
    assert page.styles == []
    assert page.scripts == []


def test_map_block_without_key() -> None:
    """Test that a keyless block loads Leaflet only."""
    page = pages.render_page(
        '<p>Find us</p>[cn-mapblock id="cn-map-1" latitude="1" longitude="2"][/cn-mapblock]',
        NO_KEY,
        SETTINGS,
    )
    assert page.html.startswith('<p>Find us</p><div id="cn-map-1"')
    assert page.styles == ["https://cdn.test/leaflet.css"]
    assert page.scripts == ["https://cdn.test/leaflet.js"]


def test_map_block_with_key_loads_google_scripts() -> None:
    """Test that a browser key adds the Google Maps and GoogleMutant scripts."""
    styles, scripts = pages.asset_urls("[cn-mapblock/]", WITH_KEY, SETTINGS)
    assert styles == ["https://cdn.test/leaflet.css"]
    assert scripts[0] == "https://cdn.test/leaflet.js"
    parsed = urllib.parse.urlparse(scripts[1])
    assert parsed.netloc == "maps.test"
    assert urllib.parse.parse_qs(parsed.query) == {"key": ["ABC 123"]}
    assert scripts[2] == "https://cdn.test/mutant.js"


def test_multiple_map_blocks_expand_independently() -> None:
    """Test that every block in the content is expanded."""
    page = pages.render_page(
        '[cn-mapblock id="a"][/cn-mapblock][cn-mapblock id="b"][/cn-mapblock]',
        NO_KEY,
        SETTINGS,
    )
    assert page.html.count('class="cn-map"') == 2
    assert '<div id="a"' in page.html
    assert '<div id="b"' in page.html


def test_google_scripts_follow_google_base_layers() -> None:
    """Test that Google scripts are listed exactly when Google layers render."""
    content = '[cn-mapblock id="g"][/cn-mapblock]'

    with_key = pages.render_page(content, WITH_KEY, SETTINGS)
    assert "google-maps-roadmap" in with_key.html
    assert with_key.scripts[2] == "https://cdn.test/mutant.js"

    without_key = pages.render_page(content, NO_KEY, SETTINGS)
    assert "google-maps-roadmap" not in without_key.html
    assert without_key.scripts == ["https://cdn.test/leaflet.js"]
