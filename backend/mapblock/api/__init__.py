"""API router subpackage for the map block service.

Submodules:
    - maps: Endpoints building a single map block into a graph or markup.
    - pages: Endpoint expanding every map block in a piece of post content.

Each module exposes its own APIRouter for composition in the application's
main FastAPI instance.
"""
