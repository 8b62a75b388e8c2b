"""Map block build and render API endpoints.

This module exposes the map block builder over HTTP: the caller posts the
attributes and inner content of one ``[cn-mapblock]`` and receives either
the scene graph as JSON or the rendered HTML/JS markup.

Example:
    Build the graph of a block:
        >>> response = client.post(
        ...     "/api/maps/graph",
        ...     json={
        ...         "atts": {"id": "cn-map-1", "latitude": "40.0",
        ...                  "longitude": "-75.0", "zoom": "10"},
        ...         "content": '[mapmarker id="m1" latitude="40.1" '
        ...                    'longitude="-75.1"]Hello[/mapmarker]',
        ...     },
        ... )
        >>> graph = response.json()
        >>> # Returns: {"id": "cn-map-1", "center": [40.0, -75.0],
        >>> #           "zoom": 10, "layers": [...], "controls": [...], ...}

    Render the same block to markup:
        >>> response = client.post("/api/maps/render", json={...})
        >>> html = response.json()["html"]
"""

from typing import Any, TypedDict

import fastapi
import pydantic

from mapblock.core import config, options
from mapblock.shortcode import map_block

router = fastapi.APIRouter(prefix="/api/maps", tags=["maps"])

AttributeValue = str | int | float | bool


class MapBlockRequest(pydantic.BaseModel):
    """Attributes and inner content of one ``[cn-mapblock]``."""

    atts: dict[str, AttributeValue] = {}
    content: str = ""


class RenderResponse(TypedDict):
    id: str
    html: str


def _get_context(
    settings: config.Settings = fastapi.Depends(config.get_settings),  # noqa: B008
) -> map_block.MapBlockContext:
    """Resolve the map block configuration dependency.

    Args:
        settings: Application settings (injected via FastAPI Depends).

    Returns:
        MapBlockContext read from the site options.
    """
    return map_block.context_from_options(options.get_options(settings))


@router.post("/graph")
async def build_graph(
    body: MapBlockRequest,
    context: map_block.MapBlockContext = fastapi.Depends(_get_context),  # noqa: B008
) -> dict[str, Any]:
    """Build a map block and return its scene graph.

    Args:
        body: Block attributes and inner content.
        context: Map block configuration (injected via FastAPI Depends).

    Returns:
        The graph as produced by ``Map.to_dict()``: id, center, zoom,
        height, width, layers (with nested groups, markers and popups) and
        controls (with base layer and overlay names).
    """
    return map_block.build_map(body.atts, body.content, context).to_dict()


@router.post("/render")
async def render_map(
    body: MapBlockRequest,
    context: map_block.MapBlockContext = fastapi.Depends(_get_context),  # noqa: B008
) -> RenderResponse:
    """Build a map block and return its markup.

    Args:
        body: Block attributes and inner content.
        context: Map block configuration (injected via FastAPI Depends).

    Returns:
        Dictionary with the map id and its HTML/JS markup.
    """
    map_ = map_block.build_map(body.atts, body.content, context)
    return {"id": map_.id, "html": map_.render()}
