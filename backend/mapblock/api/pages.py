"""Post content expansion API endpoint.

The caller posts raw post content; every ``[cn-mapblock]`` in it is
expanded to map markup and the response lists the stylesheets and scripts
the page needs to load for the maps to work.

Example:
    >>> response = client.post(
    ...     "/api/pages/render",
    ...     json={"content": '<p>Visit us</p>[cn-mapblock id="m"][/cn-mapblock]'},
    ... )
    >>> page = response.json()
    >>> # Returns: {"html": "<p>Visit us</p><div id=\\"m\\" ...", "styles":
    >>> #           ["https://unpkg.com/leaflet@1.9.4/dist/leaflet.css"],
    >>> #           "scripts": ["https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"]}
"""

from typing import TypedDict

import fastapi
import pydantic

from mapblock import pages
from mapblock.core import config, options
from mapblock.shortcode import map_block

router = fastapi.APIRouter(prefix="/api/pages", tags=["pages"])


class PageRequest(pydantic.BaseModel):
    content: str


class PageResponse(TypedDict):
    html: str
    styles: list[str]
    scripts: list[str]


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


@router.post("/render")
async def render_page(
    body: PageRequest,
    context: map_block.MapBlockContext = fastapi.Depends(_get_context),  # noqa: B008
    settings: config.Settings = fastapi.Depends(config.get_settings),  # noqa: B008
) -> PageResponse:
    """Expand map blocks in post content.

    Args:
        body: The post content.
        context: Map block configuration (injected via FastAPI Depends).
        settings: Application settings (injected via FastAPI Depends).

    Returns:
        Dictionary with the expanded HTML and the stylesheet and script
        URLs the page needs, both empty when there is no map block.
    """
    page = pages.render_page(body.content, context, settings)
    return {"html": page.html, "styles": page.styles, "scripts": page.scripts}
